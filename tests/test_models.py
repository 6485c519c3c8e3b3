"""
Tests for Pydantic domain models.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.domain.models import (
    BuildResult,
    BuilderKind,
    PackageResult,
    PipelineState,
    RunReport,
    TargetSpec,
    default_targets,
)


class TestTargetSpec:
    """Tests for TargetSpec model."""

    def test_defaults_follow_cargo_layout(self):
        """Only the name is needed for a standard workspace member."""
        target = TargetSpec(name="client")
        assert target.source_dir == "client"
        assert target.binary_path == "target/release/client"
        assert target.version_file == "client/version.txt"
        assert target.binary_name == "client"

    def test_custom_source_dir_moves_version_file(self):
        """version_file defaults relative to source_dir."""
        target = TargetSpec(name="server", source_dir="crates/server")
        assert target.version_file == "crates/server/version.txt"
        assert target.binary_path == "target/release/server"

    def test_explicit_paths_kept(self):
        target = TargetSpec(
            name="launcher",
            binary_path="target/x86_64-pc-windows-gnu/release/launcher.exe",
            version_file="launcher/VERSION",
        )
        assert target.binary_name == "launcher.exe"
        assert target.version_file == "launcher/VERSION"

    def test_package_and_archive_paths(self):
        """Archive lives inside the per-target package dir."""
        target = TargetSpec(name="client")
        assert target.package_dir(Path("build")) == Path("build/client")
        assert target.archive_path(Path("build")) == Path("build/client/client.zip")

    def test_invalid_name_rejected(self):
        with pytest.raises(ValidationError):
            TargetSpec(name="../escape")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            TargetSpec(name="")

    def test_name_whitespace_stripped(self):
        assert TargetSpec(name="  client  ").name == "client"


class TestDefaults:
    """Tests for the default target trio."""

    def test_default_targets_order(self):
        assert [t.name for t in default_targets()] == ["client", "server", "launcher"]

    def test_builder_kind_values(self):
        assert BuilderKind("local") is BuilderKind.LOCAL
        assert BuilderKind("docker") is BuilderKind.DOCKER


class TestRunReport:
    """Tests for RunReport."""

    def test_new_report_is_pending(self):
        report = RunReport(run_id="r1")
        assert report.state == PipelineState.PENDING
        assert report.succeeded is False

    def test_to_dict_is_json_friendly(self):
        report = RunReport(run_id="r1", state=PipelineState.DONE)
        report.builds.append(BuildResult("client", Path("target/release/client"), 1.23456))
        report.packages.append(
            PackageResult(
                "client",
                Path("build/client"),
                Path("build/client/client.zip"),
                ["client", "version.txt"],
            )
        )

        data = report.to_dict()
        assert data["state"] == "done"
        assert data["builds"][0]["binary_path"] == "target/release/client"
        assert data["builds"][0]["duration_seconds"] == 1.235
        assert data["packages"][0]["members"] == ["client", "version.txt"]
        assert report.succeeded is True
