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
# FLIGHT RECORDER - RUN EVIDENCE
# -----------------------------------------------------------------------------
# Every run gets a folder under the evidence dir (default .packager/runs):
# - flight_recorder.json: timestamped stage events
# - report.json: the final RunReport, pass or fail
#
# Evidence is kept OUTSIDE the output directory; build/ holds only the
# per-target package dirs.
# -----------------------------------------------------------------------------

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console

from src.domain.models import RunReport

console = Console()


@dataclass
class FlightLogEntry:
    """A single entry in the flight recorder."""

    timestamp: str
    event: str
    details: str | None = None


class FlightRecorder:
    """Collects run events in memory and writes them out once at the end."""

    def __init__(self, run_id: str, evidence_dir: Path) -> None:
        self.run_id = run_id
        self.folder = Path(evidence_dir) / run_id
        self._log: list[FlightLogEntry] = []

    @property
    def entries(self) -> list[FlightLogEntry]:
        return list(self._log)

    def log(self, event: str, details: str | None = None) -> None:
        """Record an event in the flight recorder."""
        entry = FlightLogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(), event=event, details=details
        )
        self._log.append(entry)

    def finalize(self, report: RunReport) -> Path | None:
        """
        Write flight_recorder.json and report.json.

        Evidence is best-effort: a write failure is reported but never turns
        a successful run into a failed one.
        """
        try:
            self.folder.mkdir(parents=True, exist_ok=True)
            with open(self.folder / "flight_recorder.json", "w") as f:
                json.dump(
                    [
                        {"timestamp": e.timestamp, "event": e.event, "details": e.details}
                        for e in self._log
                    ],
                    f,
                    indent=2,
                )
            with open(self.folder / "report.json", "w") as f:
                json.dump(report.to_dict(), f, indent=2)
        except OSError as e:
            console.print(f"[yellow][RECORDER] Could not write evidence: {e}[/yellow]")
            return None

        console.print(f"[dim][RECORDER] Evidence saved: {self.folder}[/dim]")
        return self.folder
