"""
Tests for shared file utilities.
"""

import logging
from pathlib import Path

import pytest

from tidy_tools.core.errors import ExhaustedError
from tidy_tools.shared import (
    format_bytes,
    get_extension,
    make_unique_path,
    setup_logging,
)


class TestGetExtension:
    """Test extension extraction."""

    def test_lowercases_and_strips_dot(self):
        """Test extensions are lowercase without the dot."""
        assert get_extension("Report.PDF") == "pdf"
        assert get_extension(Path("/a/b/photo.jpeg")) == "jpeg"

    def test_no_extension(self):
        """Test files without a suffix yield an empty string."""
        assert get_extension("Makefile") == ""

    def test_last_suffix_only(self):
        """Test only the last suffix is used."""
        assert get_extension("archive.tar.gz") == "gz"


class TestMakeUniquePath:
    """Test conflict-free path generation."""

    def test_free_path_unchanged(self, tmp_path):
        """Test a non-existing path is returned as-is."""
        desired = tmp_path / "report.pdf"
        assert make_unique_path(desired) == desired

    def test_first_conflict(self, tmp_path):
        """Test an existing file gets the _1 suffix."""
        (tmp_path / "report.pdf").write_text("x")
        assert make_unique_path(tmp_path / "report.pdf") == tmp_path / "report_1.pdf"

    def test_n_conflicts(self, tmp_path):
        """Test stem_1..stem_N taken yields stem_N+1."""
        (tmp_path / "photo.jpg").write_text("x")
        for i in range(1, 6):
            (tmp_path / f"photo_{i}.jpg").write_text("x")

        result = make_unique_path(tmp_path / "photo.jpg")

        assert result == tmp_path / "photo_6.jpg"
        assert not result.exists()

    def test_no_suffix(self, tmp_path):
        """Test files without an extension get a plain counter."""
        (tmp_path / "README").write_text("x")
        assert make_unique_path(tmp_path / "README") == tmp_path / "README_1"

    def test_accepts_string(self, tmp_path):
        """Test string paths are accepted."""
        desired = str(tmp_path / "notes.txt")
        assert make_unique_path(desired) == Path(desired)

    def test_exhausted(self, tmp_path):
        """Test the search stops at the attempt limit."""
        (tmp_path / "a.txt").write_text("x")
        for i in range(1, 4):
            (tmp_path / f"a_{i}.txt").write_text("x")

        with pytest.raises(ExhaustedError) as exc_info:
            make_unique_path(tmp_path / "a.txt", max_attempts=3)

        assert exc_info.value.attempts == 3
        assert exc_info.value.path == tmp_path / "a.txt"


class TestFormatBytes:
    """Test human readable sizes."""

    def test_zero(self):
        """Test zero bytes."""
        assert format_bytes(0) == "0 B"

    def test_bytes(self):
        """Test sizes below one kilobyte."""
        assert format_bytes(512) == "512 B"

    def test_larger_units(self):
        """Test kilobytes and megabytes."""
        assert format_bytes(1024) == "1.00 KB"
        assert format_bytes(1536) == "1.50 KB"
        assert format_bytes(5 * 1024 * 1024) == "5.00 MB"


class TestSetupLogging:
    """Test logging configuration."""

    def test_levels(self):
        """Test verbose and quiet select the root level."""
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

        setup_logging(quiet=True)
        assert logging.getLogger().level == logging.WARNING

        setup_logging()
        assert logging.getLogger().level == logging.INFO
