"""Tests for version module."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from tidy_tools.version import SOURCE_ROOT, __version__, get_git_hash, get_version_string


class TestVersion:
    """Tests for version functions."""

    def test_version_constant(self) -> None:
        """Test that version constant is defined."""
        assert isinstance(__version__, str)
        assert len(__version__) > 0

    def test_package_exports_version(self) -> None:
        """Test that the package re-exports the version."""
        import tidy_tools

        assert tidy_tools.__version__ == __version__

    @patch("tidy_tools.version.subprocess.run")
    def test_get_git_hash_success(self, mock_run: MagicMock) -> None:
        """Test the hash is read from git in the source root."""
        mock_run.return_value = MagicMock(stdout="abc1234\n")

        assert get_git_hash() == "abc1234"
        assert mock_run.call_args.kwargs["cwd"] == SOURCE_ROOT

    @patch("tidy_tools.version.subprocess.run")
    def test_get_git_hash_custom_root(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """Test another checkout can be asked."""
        mock_run.return_value = MagicMock(stdout="def5678\n")

        assert get_git_hash(tmp_path) == "def5678"
        assert mock_run.call_args.kwargs["cwd"] == tmp_path

    @patch("tidy_tools.version.subprocess.run")
    def test_get_git_hash_empty_output(self, mock_run: MagicMock) -> None:
        """Test empty git output counts as no hash."""
        mock_run.return_value = MagicMock(stdout="\n")
        assert get_git_hash() is None

    @patch("tidy_tools.version.subprocess.run")
    def test_get_git_hash_not_a_checkout(self, mock_run: MagicMock) -> None:
        """Test get_git_hash handles git failing outside a repository."""
        mock_run.side_effect = subprocess.CalledProcessError(128, "git")
        assert get_git_hash() is None

    @patch("tidy_tools.version.subprocess.run")
    def test_get_git_hash_timeout_expired(self, mock_run: MagicMock) -> None:
        """Test get_git_hash handles TimeoutExpired."""
        mock_run.side_effect = subprocess.TimeoutExpired("git", 2)
        assert get_git_hash() is None

    @patch("tidy_tools.version.subprocess.run")
    def test_get_git_hash_without_git(self, mock_run: MagicMock) -> None:
        """Test get_git_hash handles a missing git binary."""
        mock_run.side_effect = FileNotFoundError("git command not found")
        assert get_git_hash() is None

    def test_get_version_string_with_git_hash(self) -> None:
        """Test version string includes git hash when available."""
        with patch("tidy_tools.version.get_git_hash", return_value="abc1234"):
            assert get_version_string() == f"{__version__} (git:abc1234)"

    def test_get_version_string_without_git_hash(self) -> None:
        """Test version string is the bare version outside a checkout."""
        with patch("tidy_tools.version.get_git_hash", return_value=None):
            assert get_version_string() == __version__
