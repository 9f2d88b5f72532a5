"""Tests for category strategy."""

import pytest
from pydantic import ValidationError

from tidy_tools.organization.strategy import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY,
    CategoryStrategy,
)


class TestCategoryStrategy:
    """Test extension to category resolution."""

    def test_default_category_names(self):
        """Test the default categories, with Others last."""
        strategy = CategoryStrategy()
        assert strategy.category_names == [
            "Documents",
            "Images",
            "Videos",
            "Audio",
            "Others",
        ]

    def test_every_configured_extension(self):
        """Test every default extension maps to its category in any case."""
        strategy = CategoryStrategy()
        for category, extensions in DEFAULT_CATEGORIES.items():
            for ext in extensions:
                assert strategy.category_for(ext) == category
                assert strategy.category_for(ext.upper()) == category

    def test_unknown_extension(self):
        """Test unknown extensions go to Others."""
        strategy = CategoryStrategy()
        assert strategy.category_for("xyz") == DEFAULT_CATEGORY
        assert strategy.category_for("exe") == "Others"

    def test_empty_extension(self):
        """Test files without extension go to Others."""
        assert CategoryStrategy().category_for("") == "Others"

    def test_leading_dot_tolerated(self):
        """Test a leading dot is ignored."""
        assert CategoryStrategy().category_for(".PDF") == "Documents"

    def test_category_for_path(self):
        """Test resolving from a path."""
        strategy = CategoryStrategy()
        assert strategy.category_for_path("/tmp/Holiday.JPG") == "Images"
        assert strategy.category_for_path("notes") == "Others"

    def test_custom_categories(self):
        """Test a custom table and default category."""
        strategy = CategoryStrategy(
            categories={"Code": ["py", ".RS"], "Archives": ["zip"]},
            default_category="Misc",
        )
        assert strategy.category_for("rs") == "Code"
        assert strategy.category_for("zip") == "Archives"
        assert strategy.category_for("pdf") == "Misc"
        assert strategy.category_names == ["Code", "Archives", "Misc"]

    def test_default_category_listed_once(self):
        """Test a default category that also has extensions is listed once."""
        strategy = CategoryStrategy(categories={"Others": ["bin"], "Images": ["png"]})
        assert strategy.category_names == ["Images", "Others"]
        assert strategy.category_for("bin") == "Others"

    def test_duplicate_extension_rejected(self):
        """Test an extension cannot belong to two categories."""
        with pytest.raises(ValidationError):
            CategoryStrategy(categories={"A": ["txt"], "B": ["TXT"]})

    def test_is_category_name(self):
        """Test category name checks."""
        strategy = CategoryStrategy()
        assert strategy.is_category_name("Images")
        assert strategy.is_category_name("Others")
        assert not strategy.is_category_name("images")

    def test_defaults_not_shared(self):
        """Test instances do not share the default table."""
        first = CategoryStrategy()
        first.categories["Images"].append("heic")
        assert "heic" not in DEFAULT_CATEGORIES["Images"]
