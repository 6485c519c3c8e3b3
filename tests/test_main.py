# =============================================================================
# PACKAGER CLI TESTS
# =============================================================================
# Tests for the command-line entry point and its exit codes.
# =============================================================================

import zipfile
from pathlib import Path
from unittest.mock import MagicMock, patch

from src.core.versions import Version, VersionStatus
from src.domain.errors import BuildError, WorkspaceError
from src.main import build_parser, main


def fake_cargo(fail_target=None, exit_code=101):
    """subprocess.run stand-in: writes target/release/<target> into cwd."""

    def _run(cmd, cwd, timeout):
        target = cmd[-1]
        if target == fail_target:
            return MagicMock(returncode=exit_code)
        binary = Path(cwd) / "target" / "release" / target
        binary.parent.mkdir(parents=True, exist_ok=True)
        binary.write_bytes(f"binary:{target}".encode())
        return MagicMock(returncode=0)

    return _run


class TestParser:
    """Test argument parsing."""

    def test_zero_arguments_means_build(self):
        args = build_parser().parse_args([])
        assert args.command == "build"
        assert args.config is None

    def test_status_command(self):
        assert build_parser().parse_args(["status"]).command == "status"


class TestBuildCommand:
    """End-to-end through main() with cargo mocked."""

    @patch("src.infra.toolchain.subprocess.run")
    def test_full_run_exits_zero(self, mock_run, project, capsys):
        mock_run.side_effect = fake_cargo()

        code = main(["--project-root", str(project)])

        assert code == 0
        for name in ("client", "server", "launcher"):
            with zipfile.ZipFile(project / "build" / name / f"{name}.zip") as zf:
                assert sorted(zf.namelist()) == sorted([name, "version.txt"])
                assert zf.read("version.txt") == b"1.0.0"
        assert "Build and packaging complete" in capsys.readouterr().out

    @patch("src.infra.toolchain.subprocess.run")
    def test_build_failure_propagates_exit_status(self, mock_run, project):
        mock_run.side_effect = fake_cargo(fail_target="server", exit_code=101)

        code = main(["--project-root", str(project)])

        assert code == 101
        assert not (project / "build" / "client" / "client.zip").exists()
        assert not (project / "build" / "server" / "server.zip").exists()

    @patch("src.main.Pipeline")
    def test_workspace_error_exit_code(self, mock_pipeline, tmp_path):
        mock_pipeline.return_value.run.side_effect = WorkspaceError("permission denied")
        assert main(["--project-root", str(tmp_path)]) == 1

    @patch("src.main.Pipeline")
    def test_error_message_printed(self, mock_pipeline, tmp_path, capsys):
        mock_pipeline.return_value.run.side_effect = BuildError("boom", target="client", exit_code=3)
        assert main(["--project-root", str(tmp_path)]) == 3
        assert "boom" in capsys.readouterr().out

    def test_config_error_exit_code(self, tmp_path):
        (tmp_path / "packager.yaml").write_text("targets: [\n")
        assert main(["--project-root", str(tmp_path)]) == 2


class TestStatusCommand:
    """Test `packager status`."""

    @patch("src.main.check_versions")
    def test_prints_table(self, mock_check, tmp_path, capsys):
        mock_check.return_value = [
            VersionStatus("client", Version(1, 0, 0), Version(1, 1, 0)),
            VersionStatus("server", Version(1, 0, 0), Version(1, 0, 0)),
            VersionStatus("launcher", None, None, error="missing"),
        ]

        code = main(["status", "--project-root", str(tmp_path)])

        out = capsys.readouterr().out
        assert code == 0
        assert "update available" in out
        assert "up to date" in out
        assert "missing" in out
        args = mock_check.call_args[0]
        assert args[0] == tmp_path.resolve() / "build"
        assert args[1] == ["client", "server", "launcher"]
