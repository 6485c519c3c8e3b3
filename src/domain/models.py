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
# DOMAIN MODELS - RELEASE TARGETS
# -----------------------------------------------------------------------------
# These models describe WHAT gets built and packaged. The Builder and the
# Packager act on them; neither knows where a target's paths came from
# (defaults, packager.yaml, or a test fixture).
#
# All paths are relative to the project root unless stated otherwise.
# -----------------------------------------------------------------------------

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

VERSION_FILE_NAME = "version.txt"
RELEASE_DIR = "target/release"
DEFAULT_TARGET_NAMES = ("client", "server", "launcher")


class BuilderKind(str, Enum):
    """Where the toolchain runs."""

    LOCAL = "local"
    DOCKER = "docker"


class PipelineState(str, Enum):
    """
    Linear run state.

    PENDING -> RESET -> BUILT -> PACKAGED -> DONE. Any failing stage moves
    the run to ABORTED, which is terminal.
    """

    PENDING = "pending"
    RESET = "reset"
    BUILT = "built"
    PACKAGED = "packaged"
    DONE = "done"
    ABORTED = "aborted"


class TargetSpec(BaseModel):
    """
    A single release target (one binary, one version marker, one archive).

    Only `name` is required; the rest default to the cargo workspace layout:
    sources in `<name>/`, release binary in `target/release/<name>`.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=r"^[a-zA-Z][a-zA-Z0-9_-]*$",
        description="Binary target name (e.g. 'client')",
    )
    source_dir: str | None = Field(
        default=None, description="Source directory holding version.txt"
    )
    binary_path: str | None = Field(
        default=None, description="Where the toolchain leaves the release binary"
    )
    version_file: str | None = Field(
        default=None, description="Version marker copied verbatim into the package"
    )

    class Config:
        """Pydantic configuration for strict validation."""

        str_strip_whitespace = True

    @model_validator(mode="after")
    def _fill_defaults(self) -> "TargetSpec":
        if self.source_dir is None:
            self.source_dir = self.name
        if self.binary_path is None:
            self.binary_path = f"{RELEASE_DIR}/{self.name}"
        if self.version_file is None:
            self.version_file = f"{self.source_dir}/{VERSION_FILE_NAME}"
        return self

    @property
    def binary_name(self) -> str:
        return Path(self.binary_path).name

    def package_dir(self, output_dir: Path) -> Path:
        """Per-target staging folder inside the output directory."""
        return Path(output_dir) / self.name

    def archive_path(self, output_dir: Path) -> Path:
        """The zip produced for this target: <output>/<name>/<name>.zip"""
        return self.package_dir(output_dir) / f"{self.name}.zip"


def default_targets() -> list[TargetSpec]:
    """The client / server / launcher trio."""
    return [TargetSpec(name=name) for name in DEFAULT_TARGET_NAMES]


@dataclass
class BuildResult:
    """Result of a successful toolchain run for one target."""

    target: str
    binary_path: Path
    duration_seconds: float


@dataclass
class PackageResult:
    """Result of packaging one target."""

    target: str
    package_dir: Path
    archive_path: Path
    members: list[str] = field(default_factory=list)


@dataclass
class RunReport:
    """Everything a single pipeline run produced, pass or fail."""

    run_id: str
    state: PipelineState = PipelineState.PENDING
    builds: list[BuildResult] = field(default_factory=list)
    packages: list[PackageResult] = field(default_factory=list)
    failed_stage: str | None = None
    error: str | None = None
    exit_code: int = 0
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineState.DONE

    def to_dict(self) -> dict:
        """JSON-friendly view for the evidence folder."""
        return {
            "run_id": self.run_id,
            "state": self.state.value,
            "builds": [
                {
                    "target": b.target,
                    "binary_path": str(b.binary_path),
                    "duration_seconds": round(b.duration_seconds, 3),
                }
                for b in self.builds
            ],
            "packages": [
                {
                    "target": p.target,
                    "package_dir": str(p.package_dir),
                    "archive_path": str(p.archive_path),
                    "members": p.members,
                }
                for p in self.packages
            ],
            "failed_stage": self.failed_stage,
            "error": self.error,
            "exit_code": self.exit_code,
            "duration_seconds": round(self.duration_seconds, 3),
        }
