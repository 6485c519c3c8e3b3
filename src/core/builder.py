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
# THE BUILDER - RELEASE COMPILATION
# -----------------------------------------------------------------------------
# Responsibility: Produce the release binary for a target and prove it
# exists. A build only counts as successful when the toolchain exits 0 AND
# the binary is at its fixed path afterwards.
#
# No retries. The first failure propagates to the pipeline.
# -----------------------------------------------------------------------------

import time
from pathlib import Path
from typing import Protocol

from rich.console import Console

from src.core.config import PackagerConfig
from src.domain.errors import MissingArtifactError
from src.domain.models import BuilderKind, BuildResult, TargetSpec
from src.infra.toolchain import Toolchain

console = Console()


class ToolchainRunner(Protocol):
    def build(self, target: str) -> None: ...


def make_toolchain(config: PackagerConfig, project_root: Path) -> ToolchainRunner:
    """Pick the host or container toolchain for this configuration."""
    if config.builder == BuilderKind.DOCKER:
        from src.infra.docker_client import ContainerToolchain

        return ContainerToolchain(
            project_root,
            config.toolchain,
            config.build_timeout_seconds,
            image=config.docker_image,
        )
    return Toolchain(project_root, config.toolchain, config.build_timeout_seconds)


class Builder:
    """Builds targets through a toolchain and verifies the output binary."""

    def __init__(self, project_root: Path, toolchain: ToolchainRunner) -> None:
        self._root = Path(project_root)
        self._toolchain = toolchain

    def binary_for(self, target: TargetSpec) -> Path:
        return self._root / target.binary_path

    def build(self, target: TargetSpec) -> BuildResult:
        """
        Compile one target in release mode.

        Returns:
            BuildResult with the verified binary path.

        Raises:
            BuildError: Toolchain failure (from the toolchain).
            BuildTimeoutError: Toolchain exceeded the timeout.
            MissingArtifactError: Toolchain succeeded but the binary is absent.
        """
        console.print(f"[bold cyan][BUILD] Building {target.name}...[/bold cyan]")
        start = time.monotonic()

        self._toolchain.build(target.name)

        binary = self.binary_for(target)
        if not binary.is_file():
            console.print(f"[red][BUILD] Expected binary missing: {binary}[/red]")
            raise MissingArtifactError(
                f"Build of '{target.name}' reported success but {target.binary_path} does not exist",
                path=str(binary),
            )

        duration = time.monotonic() - start
        console.print(f"[green][BUILD] {target.name} ready ({duration:.1f}s)[/green]")
        return BuildResult(target=target.name, binary_path=binary, duration_seconds=duration)
