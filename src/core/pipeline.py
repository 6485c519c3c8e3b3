# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# THE PIPELINE - ORCHESTRATOR
# -----------------------------------------------------------------------------
# Responsibility: Run the release as an explicit, ordered list of named
# stages and stop at the first failure.
#
#   reset -> build:<t>... -> package:<t>... -> report
#
# Every build finishes before any packaging starts, so a failed build leaves
# no archive for ANY target. State moves PENDING -> RESET -> BUILT ->
# PACKAGED -> DONE; a failing stage moves it to ABORTED and re-raises.
# -----------------------------------------------------------------------------

import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.panel import Panel

from src.core.builder import Builder, make_toolchain
from src.core.config import PackagerConfig, resolve_output_dir
from src.core.packager import Packager
from src.core.recorder import FlightRecorder
from src.core.workspace import reset_workspace
from src.domain.errors import PackagerError, PipelineInterrupted
from src.domain.models import PipelineState, RunReport

console = Console()


@dataclass
class Stage:
    """One named step; `state_after` is entered once the step succeeds."""

    name: str
    action: Callable[[], None]
    state_after: PipelineState | None = None


def new_run_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    return f"{stamp}-{uuid.uuid4().hex[:8]}"


class Pipeline:
    """
    Reset, build, package, report.

    Collaborators can be injected for tests; by default they are built from
    the configuration.
    """

    def __init__(
        self,
        config: PackagerConfig,
        project_root: Path,
        builder: Builder | None = None,
        packager: Packager | None = None,
        recorder: FlightRecorder | None = None,
    ) -> None:
        self._config = config
        self._root = Path(project_root)
        self.output_dir = resolve_output_dir(self._root, config.output_dir)
        self._builder = builder
        self._packager = packager or Packager(self._root, self.output_dir)

        self.report = RunReport(run_id=new_run_id())
        self._recorder = recorder or FlightRecorder(
            self.report.run_id, self._root / config.evidence_dir
        )
        self.stages = self._plan()

    @property
    def state(self) -> PipelineState:
        return self.report.state

    def _get_builder(self) -> Builder:
        # Created lazily so a docker builder only connects after the reset succeeds.
        if self._builder is None:
            self._builder = Builder(self._root, make_toolchain(self._config, self._root))
        return self._builder

    def _plan(self) -> list[Stage]:
        targets = self._config.targets
        stages = [Stage("reset", self._reset, PipelineState.RESET)]

        for i, target in enumerate(targets):
            last = i == len(targets) - 1
            stages.append(
                Stage(
                    f"build:{target.name}",
                    lambda t=target: self._build(t),
                    PipelineState.BUILT if last else None,
                )
            )
        for i, target in enumerate(targets):
            last = i == len(targets) - 1
            stages.append(
                Stage(
                    f"package:{target.name}",
                    lambda t=target: self._package(t),
                    PipelineState.PACKAGED if last else None,
                )
            )

        stages.append(Stage("report", self._announce, PipelineState.DONE))
        return stages

    def _reset(self) -> None:
        reset_workspace(self.output_dir)
        self._recorder.log("RESET_DONE", str(self.output_dir))

    def _build(self, target) -> None:
        self._recorder.log("BUILD_STARTED", target.name)
        result = self._get_builder().build(target)
        self.report.builds.append(result)
        self._recorder.log("BUILD_COMPLETE", f"{target.name} ({result.duration_seconds:.1f}s)")

    def _package(self, target) -> None:
        result = self._packager.package(target)
        self.report.packages.append(result)
        self._recorder.log("PACKAGE_COMPLETE", str(result.archive_path))

    def _announce(self) -> None:
        console.print(
            Panel(
                f"[bold green]Build and packaging complete.[/bold green]\n"
                f"Output in {self.output_dir}\n"
                + "\n".join(f"  - {p.archive_path}" for p in self.report.packages),
                title="RELEASE READY",
                border_style="green",
            )
        )

    def _abort(self, stage: Stage, error: PackagerError) -> None:
        self.report.state = PipelineState.ABORTED
        self.report.failed_stage = stage.name
        self.report.error = str(error)
        self.report.exit_code = error.exit_code
        self._recorder.log("RUN_ABORTED", f"{stage.name}: {error}")
        console.print(
            Panel(
                f"[bold red]Stage '{stage.name}' failed[/bold red]\n\n{error}",
                title="RELEASE ABORTED",
                border_style="red",
            )
        )

    def run(self) -> RunReport:
        """
        Execute every stage in order.

        Returns:
            RunReport in state DONE.

        Raises:
            PackagerError: The first stage failure (the run is ABORTED).
            PipelineInterrupted: The operator pressed Ctrl+C.
        """
        start = time.monotonic()
        console.print(
            f"[bold cyan][PIPELINE] Run {self.report.run_id}: "
            f"{', '.join(t.name for t in self._config.targets)}[/bold cyan]"
        )

        try:
            for stage in self.stages:
                try:
                    stage.action()
                except KeyboardInterrupt:
                    raise PipelineInterrupted(f"Interrupted during {stage.name}")
                except PackagerError as e:
                    self._abort(stage, e)
                    raise
                if stage.state_after is not None:
                    self.report.state = stage.state_after

            self._recorder.log("RUN_COMPLETE")
            return self.report
        except PipelineInterrupted as e:
            self._abort(stage, e)
            raise
        finally:
            self.report.duration_seconds = time.monotonic() - start
            self._recorder.finalize(self.report)
