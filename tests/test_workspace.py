# =============================================================================
# WORKSPACE RESET TESTS
# =============================================================================

from unittest.mock import patch

import pytest

from src.core.workspace import reset_workspace
from src.domain.errors import WorkspaceError


class TestResetWorkspace:
    """Test reset_workspace."""

    def test_creates_missing_directory_with_parents(self, tmp_path):
        """A path that does not exist yet is not an error."""
        out = tmp_path / "nested" / "build"
        reset_workspace(out)
        assert out.is_dir()
        assert list(out.iterdir()) == []

    def test_clears_previous_contents(self, tmp_path):
        out = tmp_path / "build"
        (out / "client").mkdir(parents=True)
        (out / "client" / "client.zip").write_bytes(b"old")
        (out / "stray.txt").write_text("leftover")

        reset_workspace(out)

        assert out.is_dir()
        assert list(out.iterdir()) == []

    def test_replaces_regular_file(self, tmp_path):
        out = tmp_path / "build"
        out.write_text("not a directory")
        reset_workspace(out)
        assert out.is_dir()

    def test_returns_path(self, tmp_path):
        assert reset_workspace(tmp_path / "build") == tmp_path / "build"

    def test_failure_raises_workspace_error(self, tmp_path):
        out = tmp_path / "build"
        out.mkdir()
        with patch("src.core.workspace.shutil.rmtree", side_effect=PermissionError("denied")):
            with pytest.raises(WorkspaceError) as exc:
                reset_workspace(out)
        assert "denied" in str(exc.value)
        assert exc.value.exit_code == 1
