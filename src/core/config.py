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
# PACKAGER CONFIGURATION
# -----------------------------------------------------------------------------
# Responsibility: Resolve the run configuration from (lowest to highest):
#   1. Built-in defaults (client/server/launcher, ./build, cargo --release)
#   2. packager.yaml in the project root
#   3. PACKAGER_* environment variables (.env is loaded first)
#
# With no file and no environment the packager behaves exactly like the
# plain release script: three targets, output in ./build.
# -----------------------------------------------------------------------------

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from rich.console import Console

from src.domain.errors import ConfigError
from src.domain.models import BuilderKind, TargetSpec, default_targets

console = Console()

CONFIG_FILE_NAME = "packager.yaml"
DEFAULT_TOOLCHAIN = ["cargo", "build", "--release", "--bin"]
DEFAULT_DOCKER_IMAGE = "rust:1.75-slim"
DEFAULT_BUILD_TIMEOUT_SECONDS = 600
DEFAULT_EVIDENCE_DIR = ".packager/runs"

# Published version markers live at <server>/<target>/version.txt (the source tree)
DEFAULT_VERSION_SERVERS = [
    "https://raw.githubusercontent.com/Larmbs/multiplayer_game/refs/heads/master/",
]


class PackagerConfig(BaseModel):
    """
    Validated packager settings.

    Loaded from packager.yaml at startup; every field has a default.
    """

    output_dir: str = "build"
    targets: list[TargetSpec] = Field(default_factory=default_targets, min_length=1)
    toolchain: list[str] = Field(default_factory=lambda: list(DEFAULT_TOOLCHAIN), min_length=1)
    builder: BuilderKind = BuilderKind.LOCAL
    docker_image: str = DEFAULT_DOCKER_IMAGE
    build_timeout_seconds: int = Field(default=DEFAULT_BUILD_TIMEOUT_SECONDS, gt=0)
    evidence_dir: str = DEFAULT_EVIDENCE_DIR
    version_servers: list[str] = Field(default_factory=lambda: list(DEFAULT_VERSION_SERVERS))

    @field_validator("targets", mode="before")
    @classmethod
    def _expand_target_names(cls, value):
        # `targets: [client, server]` is shorthand for `[{name: client}, ...]`
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    @field_validator("output_dir")
    @classmethod
    def _check_output_dir(cls, value: str) -> str:
        # The output dir is rmtree'd on every run; it must be a subdirectory.
        path = Path(value.strip())
        if not value.strip() or path.is_absolute():
            raise ValueError("output_dir must be a relative subdirectory of the project root")
        if ".." in path.parts or path == Path("."):
            raise ValueError(f"output_dir must stay inside the project root: {value!r}")
        return value.strip()

    @model_validator(mode="after")
    def _check_unique_targets(self) -> "PackagerConfig":
        names = [t.name for t in self.targets]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate targets: {', '.join(duplicates)}")
        return self


def _env_overrides() -> dict:
    """Collect PACKAGER_* environment overrides."""
    overrides: dict = {}
    if os.getenv("PACKAGER_OUTPUT_DIR"):
        overrides["output_dir"] = os.getenv("PACKAGER_OUTPUT_DIR")
    if os.getenv("PACKAGER_BUILDER"):
        overrides["builder"] = os.getenv("PACKAGER_BUILDER", "").lower()
    if os.getenv("PACKAGER_BUILD_TIMEOUT"):
        overrides["build_timeout_seconds"] = os.getenv("PACKAGER_BUILD_TIMEOUT")
    if os.getenv("PACKAGER_DOCKER_IMAGE"):
        overrides["docker_image"] = os.getenv("PACKAGER_DOCKER_IMAGE")
    return overrides


def load_config(project_root: Path, config_path: Path | None = None) -> PackagerConfig:
    """
    Load configuration for a project.

    Args:
        project_root: Directory the build runs from.
        config_path: Explicit YAML file; defaults to <project_root>/packager.yaml.

    Returns:
        PackagerConfig with validated settings.

    Raises:
        ConfigError: If the YAML is malformed or a value fails validation.
    """
    project_root = Path(project_root)
    load_dotenv(project_root / ".env")

    path = Path(config_path) if config_path else project_root / CONFIG_FILE_NAME
    data: dict = {}

    if path.exists():
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping at the top level")
        console.print(f"[cyan][CONFIG] Loaded {path}[/cyan]")
    elif config_path:
        raise ConfigError(f"Config file not found: {path}")

    data.update(_env_overrides())

    try:
        return PackagerConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid packager configuration: {e}")


def resolve_output_dir(project_root: Path, output_dir: str) -> Path:
    """
    Resolve the output directory and make sure it sits strictly below the root.

    Raises:
        ConfigError: If it resolves to the project root or outside it
            (e.g. through a symlink).
    """
    root = Path(project_root).resolve()
    resolved = (root / output_dir).resolve()
    if resolved == root or root not in resolved.parents:
        raise ConfigError(
            f"output_dir {output_dir!r} resolves to {resolved}, outside {root}; refusing to reset it"
        )
    return resolved
