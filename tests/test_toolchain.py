# =============================================================================
# TOOLCHAIN TESTS
# =============================================================================
# Tests for the host compiler wrapper (subprocess is mocked).
# =============================================================================

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from src.domain.errors import BuildError, BuildTimeoutError
from src.infra.toolchain import Toolchain

CARGO = ["cargo", "build", "--release", "--bin"]


class TestToolchain:
    """Test Toolchain.build."""

    def test_command_appends_target(self, tmp_path):
        toolchain = Toolchain(tmp_path, CARGO, timeout=60)
        assert toolchain.command_for("server") == [
            "cargo", "build", "--release", "--bin", "server",
        ]

    @patch("src.infra.toolchain.subprocess.run")
    def test_success_runs_in_project_root(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=0)

        Toolchain(tmp_path, CARGO, timeout=60).build("client")

        mock_run.assert_called_once_with(
            ["cargo", "build", "--release", "--bin", "client"], cwd=tmp_path, timeout=60
        )

    @patch("src.infra.toolchain.subprocess.run")
    def test_nonzero_exit_propagates_status(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=101)

        with pytest.raises(BuildError) as exc:
            Toolchain(tmp_path, CARGO, timeout=60).build("server")

        assert exc.value.exit_code == 101
        assert exc.value.target == "server"

    @patch("src.infra.toolchain.subprocess.run")
    def test_signal_exit_is_still_failure(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=-9)

        with pytest.raises(BuildError) as exc:
            Toolchain(tmp_path, CARGO, timeout=60).build("server")

        assert exc.value.exit_code == 1

    @patch("src.infra.toolchain.subprocess.run")
    def test_timeout(self, mock_run, tmp_path):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="cargo", timeout=5)

        with pytest.raises(BuildTimeoutError) as exc:
            Toolchain(tmp_path, CARGO, timeout=5).build("launcher")

        assert exc.value.exit_code == 124
        assert "5s" in str(exc.value)

    @patch("src.infra.toolchain.subprocess.run")
    def test_missing_executable(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("cargo")

        with pytest.raises(BuildError) as exc:
            Toolchain(tmp_path, CARGO, timeout=60).build("client")

        assert exc.value.exit_code == 127
        assert "cargo" in str(exc.value)
