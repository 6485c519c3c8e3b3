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
# THE PACKAGER - DISTRIBUTABLE ARCHIVES
# -----------------------------------------------------------------------------
# Responsibility: Stage a target's binary and version marker into
# <output>/<target>/ and zip exactly those two files into <target>.zip.
#
# Archive members are flat, relative names ("client", "version.txt") so
# extracting anywhere reproduces the same two files. The binary keeps its
# executable bits inside the zip; mtimes before 1980 (reproducible builds)
# are clamped to 1980-01-01.
#
# A partially written package dir is left behind on failure; the next run's
# workspace reset clears it.
# -----------------------------------------------------------------------------

import shutil
import zipfile
from pathlib import Path

from rich.console import Console

from src.domain.errors import MissingArtifactError, PackagingError
from src.domain.models import VERSION_FILE_NAME, PackageResult, TargetSpec

console = Console()


class Packager:
    """Copies build outputs into per-target package dirs and archives them."""

    def __init__(self, project_root: Path, output_dir: Path) -> None:
        self._root = Path(project_root)
        self._output = Path(output_dir)

    def _require(self, path: Path, what: str) -> None:
        if not path.is_file():
            console.print(f"[red][PACKAGE] Missing {what}: {path}[/red]")
            raise MissingArtifactError(f"Missing {what}: {path}", path=str(path))

    def package(self, target: TargetSpec) -> PackageResult:
        """
        Package one target.

        Returns:
            PackageResult listing the archive and its members.

        Raises:
            MissingArtifactError: Binary or version marker does not exist.
            PackagingError: Copy or archive step failed.
        """
        binary = self._root / target.binary_path
        version_file = self._root / target.version_file
        self._require(binary, f"binary for {target.name}")
        self._require(version_file, f"version marker for {target.name}")

        package_dir = target.package_dir(self._output)
        archive = target.archive_path(self._output)
        members = [target.binary_name, VERSION_FILE_NAME]

        console.print(f"[cyan][PACKAGE] Packaging {target.name} -> {archive}[/cyan]")

        try:
            package_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(binary, package_dir / target.binary_name)
            shutil.copyfile(version_file, package_dir / VERSION_FILE_NAME)

            with zipfile.ZipFile(
                archive, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
            ) as zf:
                for name in members:
                    zf.write(package_dir / name, arcname=name)
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            console.print(f"[red][PACKAGE] {target.name} failed: {e}[/red]")
            raise PackagingError(f"Packaging '{target.name}' failed: {e}")

        console.print(f"[green][PACKAGE] {archive.name}: {', '.join(members)}[/green]")
        return PackageResult(
            target=target.name, package_dir=package_dir, archive_path=archive, members=members
        )
