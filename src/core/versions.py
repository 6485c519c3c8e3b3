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
# VERSION MARKERS
# -----------------------------------------------------------------------------
# Responsibility: Read the version.txt files that packaging leaves in
# build/<target>/ and compare them with the published copies on a version
# server (same relative layout: <server>/<target>/version.txt).
#
# The pipeline never parses version markers; only `packager status` does.
# -----------------------------------------------------------------------------

import re
from dataclasses import dataclass
from functools import total_ordering
from pathlib import Path

import requests
from rich.console import Console

from src.domain.models import VERSION_FILE_NAME

console = Console()

REMOTE_TIMEOUT_SECONDS = 10
_VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


class VersionError(Exception):
    """Raised when a version marker cannot be read or parsed."""

    pass


@total_ordering
@dataclass(frozen=True)
class Version:
    """A major.minor.patch version."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "Version":
        match = _VERSION_RE.match(text.strip())
        if not match:
            raise VersionError(f"Not a major.minor.patch version: {text.strip()!r}")
        return cls(*(int(part) for part in match.groups()))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return (self.major, self.minor, self.patch) < (other.major, other.minor, other.patch)


@dataclass
class VersionStatus:
    """Packaged vs published version for one target."""

    target: str
    local: Version | None
    remote: Version | None
    error: str | None = None

    @property
    def update_available(self) -> bool:
        return self.local is not None and self.remote is not None and self.remote > self.local


def read_packaged_version(output_dir: Path, target: str) -> Version:
    """Read build/<target>/version.txt."""
    path = Path(output_dir) / target / VERSION_FILE_NAME
    try:
        return Version.parse(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise VersionError(f"Cannot read {path}: {e}")


def fetch_remote_version(base_url: str, target: str) -> Version:
    """GET <base_url>/<target>/version.txt"""
    url = f"{base_url.rstrip('/')}/{target}/{VERSION_FILE_NAME}"
    try:
        response = requests.get(url, timeout=REMOTE_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        raise VersionError(f"Version server request failed: {e}")

    if response.status_code != 200:
        raise VersionError(f"Version server returned {response.status_code} for {url}")
    return Version.parse(response.text)


def check_versions(output_dir: Path, targets: list[str], servers: list[str]) -> list[VersionStatus]:
    """
    Compare packaged and published versions for each target.

    Servers are tried in order; the first one that answers wins. Failures are
    recorded per target rather than raised.
    """
    statuses = []
    for target in targets:
        status = VersionStatus(target=target, local=None, remote=None)
        errors = []

        try:
            status.local = read_packaged_version(output_dir, target)
        except VersionError as e:
            errors.append(str(e))

        for server in servers:
            try:
                status.remote = fetch_remote_version(server, target)
                break
            except VersionError as e:
                console.print(f"[dim][VERSIONS] {server}: {e}[/dim]")
                errors.append(str(e))

        if errors and (status.local is None or status.remote is None):
            status.error = "; ".join(errors)
        statuses.append(status)
    return statuses
