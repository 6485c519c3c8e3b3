"""
Pytest configuration and fixtures for packager tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to path for `src.*` imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Keep the developer's own overrides out of the tests
for _var in ("PACKAGER_OUTPUT_DIR", "PACKAGER_BUILDER", "PACKAGER_BUILD_TIMEOUT", "PACKAGER_DOCKER_IMAGE"):
    os.environ.pop(_var, None)

from src.core.builder import Builder  # noqa: E402
from src.core.config import PackagerConfig  # noqa: E402
from src.domain.errors import BuildError  # noqa: E402

TARGETS = ("client", "server", "launcher")


class FakeToolchain:
    """
    Stands in for cargo: writes target/release/<name> on success.

    `failures` maps target name -> exit code to simulate a compile error.
    `skip_binary` lists targets that "succeed" without producing a binary.
    """

    def __init__(self, project_root: Path, failures: dict | None = None, skip_binary=()) -> None:
        self.root = Path(project_root)
        self.failures = failures or {}
        self.skip_binary = set(skip_binary)
        self.calls: list[str] = []
        self.build_count = 0

    def build(self, target: str) -> None:
        self.calls.append(target)
        if target in self.failures:
            raise BuildError(f"Build of '{target}' failed", target=target, exit_code=self.failures[target])
        if target in self.skip_binary:
            return
        self.build_count += 1
        binary = self.root / "target" / "release" / target
        binary.parent.mkdir(parents=True, exist_ok=True)
        binary.write_bytes(f"\x7fELF {target} build {self.build_count}".encode())
        binary.chmod(0o755)


@pytest.fixture
def project(tmp_path):
    """A three-target project whose version markers all read 1.0.0."""
    root = tmp_path / "game"
    for name in TARGETS:
        (root / name).mkdir(parents=True)
        (root / name / "version.txt").write_text("1.0.0")
    return root


@pytest.fixture
def config():
    """Default configuration (client/server/launcher, ./build)."""
    return PackagerConfig()


@pytest.fixture
def fake_toolchain(project):
    return FakeToolchain(project)


@pytest.fixture
def builder(project, fake_toolchain):
    return Builder(project, fake_toolchain)
