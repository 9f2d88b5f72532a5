"""Tests for the interactive CLI."""

from unittest.mock import patch

from click.testing import CliRunner

from tidy_tools.cli import main
from tidy_tools.version import __version__


class TestMainCLI:
    """Test the interactive entry point."""

    def test_version(self):
        """Test --version prints the version and exits."""
        result = CliRunner().invoke(main.cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    @patch("tidy_tools.version.get_git_hash", return_value="abc1234")
    def test_banner_shows_git_hash(self, mock_hash):
        """Test the banner carries the full version string."""
        result = CliRunner().invoke(main.cli, [], input="0\n")

        assert result.exit_code == 0
        assert "(git:abc1234)" in result.output

    def test_exit_immediately(self):
        """Test choosing 0 leaves the menu."""
        result = CliRunner().invoke(main.cli, [], input="0\n")

        assert result.exit_code == 0
        assert "Main Menu" in result.output
        assert "Thank you" in result.output

    def test_help_option(self):
        """Test the help screen lists the categories."""
        result = CliRunner().invoke(main.cli, [], input="5\n\n0\n")

        assert result.exit_code == 0
        assert "Documents" in result.output
        assert "Others" in result.output

    def test_organize_and_undo_from_menu(self, messy_dir):
        """Test organizing and undoing through the menu."""
        user_input = "\n".join(
            [
                "2",
                str(messy_dir),
                "y",
                "",
                "3",
                str(messy_dir),
                "",
                "",
                "0",
            ]
        )

        result = CliRunner().invoke(main.cli, [], input=user_input + "\n")

        assert result.exit_code == 0
        assert (messy_dir / "report.pdf").exists()
        assert not (messy_dir / "Documents").exists()

    def test_organize_cancelled(self, messy_dir):
        """Test declining the confirmation leaves files in place."""
        result = CliRunner().invoke(
            main.cli, [], input=f"2\n{messy_dir}\nn\n\n0\n"
        )

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert (messy_dir / "report.pdf").exists()

    def test_keyboard_interrupt(self):
        """Test Ctrl-C exits cleanly."""
        with patch.object(main.Prompt, "ask", side_effect=KeyboardInterrupt):
            result = CliRunner().invoke(main.cli, [])

        assert result.exit_code == 0
        assert "Goodbye" in result.output
