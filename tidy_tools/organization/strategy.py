"""
Category strategy for file organization.

Maps file extensions to the category directories files are sorted into.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, PrivateAttr, field_validator

DEFAULT_CATEGORY = "Others"

DEFAULT_CATEGORIES: Dict[str, List[str]] = {
    "Documents": [
        "pdf",
        "doc",
        "docx",
        "txt",
        "rtf",
        "odt",
        "xls",
        "xlsx",
        "ppt",
        "pptx",
        "csv",
        "md",
    ],
    "Images": ["jpg", "jpeg", "png", "gif", "bmp", "tiff", "svg", "webp", "ico"],
    "Videos": ["mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v", "3gp"],
    "Audio": ["mp3", "wav", "flac", "aac", "ogg", "wma", "m4a", "opus"],
}


def _normalize_extension(extension: str) -> str:
    return extension.strip().lower().lstrip(".")


class CategoryStrategy(BaseModel):
    """Strategy for sorting files into categories by extension."""

    categories: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CATEGORIES.items()},
        description="Category name -> extensions (without leading dot)",
    )

    default_category: str = Field(
        default=DEFAULT_CATEGORY,
        description="Category for unknown extensions and files without one",
    )

    _lookup: Dict[str, str] = PrivateAttr(default_factory=dict)

    @field_validator("categories")
    @classmethod
    def _check_unique_extensions(
        cls, value: Dict[str, List[str]]
    ) -> Dict[str, List[str]]:
        owners: Dict[str, str] = {}
        normalized: Dict[str, List[str]] = {}
        for category, extensions in value.items():
            normalized[category] = []
            for ext in extensions:
                ext = _normalize_extension(ext)
                if not ext:
                    continue
                if ext in owners and owners[ext] != category:
                    raise ValueError(
                        f"Extension '{ext}' is mapped to both "
                        f"{owners[ext]} and {category}"
                    )
                owners[ext] = category
                normalized[category].append(ext)
        return normalized

    def model_post_init(self, __context: Any) -> None:
        self._lookup = {
            ext: category
            for category, extensions in self.categories.items()
            for ext in extensions
        }

    @property
    def category_names(self) -> List[str]:
        """All category directory names, default category last."""
        names = [name for name in self.categories if name != self.default_category]
        names.append(self.default_category)
        return names

    def category_for(self, extension: str) -> str:
        """
        Get the category for an extension.

        Args:
            extension: Extension without the leading dot (case-insensitive)

        Returns:
            Category name, or the default category for unknown extensions
        """
        return self._lookup.get(_normalize_extension(extension), self.default_category)

    def category_for_path(self, path: Union[str, Path]) -> str:
        """Get the category for a file path based on its suffix."""
        return self.category_for(Path(path).suffix)

    def is_category_name(self, name: str) -> bool:
        return name in self.category_names
