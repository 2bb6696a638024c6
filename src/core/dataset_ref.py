"""Dataset reference resolution.

This module turns an owner/name pair into the canonical dataset path
and the derived cache key and extraction directory names.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import (
    ARCHIVE_SUFFIX,
    DATASET_PATH_SEPARATOR,
    FLAT_NAME_SEPARATOR,
    PARSED_CACHE_SUFFIX,
)
from core.errors import ValidationError

_PATH_SEPARATORS = ("/", "\\")


@dataclass(frozen=True)
class DatasetRef:
    """Immutable owner/name dataset identifier.

    Attributes:
        owner: Dataset owner slug.
        name: Dataset slug.
    """

    owner: str
    name: str

    def __post_init__(self) -> None:
        _validate_segment(self.owner, "owner")
        _validate_segment(self.name, "name")
        if FLAT_NAME_SEPARATOR in self.owner:
            raise ValidationError(
                f"Invalid dataset owner '{self.owner}': owner must not contain "
                f"'{FLAT_NAME_SEPARATOR}'. Use the owner slug shown in the dataset URL."
            )

    @classmethod
    def parse(cls, dataset_path: str) -> "DatasetRef":
        """Build a reference from an ``owner/name`` dataset path.

        Args:
            dataset_path: Dataset path string.

        Returns:
            Parsed dataset reference.

        Raises:
            ValidationError: If the path is not exactly two segments.
        """
        parts = dataset_path.split(DATASET_PATH_SEPARATOR)
        if len(parts) != 2:
            raise ValidationError(
                f"Invalid dataset path '{dataset_path}': expected owner/name."
            )
        return cls(owner=parts[0], name=parts[1])

    @property
    def path(self) -> str:
        return f"{self.owner}{DATASET_PATH_SEPARATOR}{self.name}"

    @property
    def flat_name(self) -> str:
        return f"{self.owner}{FLAT_NAME_SEPARATOR}{self.name}"

    @property
    def cache_key(self) -> str:
        return f"{self.flat_name}{PARSED_CACHE_SUFFIX}"

    @property
    def archive_name(self) -> str:
        return f"{self.flat_name}{ARCHIVE_SUFFIX}"

    def extraction_dir(self, download_root: Path) -> Path:
        """Return the extraction directory under a download root."""
        return download_root / self.flat_name


def _validate_segment(value: str, field_name: str) -> None:
    """Validate one owner or name segment.

    Args:
        value: Segment value.
        field_name: Segment label for error messages.

    Raises:
        ValidationError: If value is blank or contains a path separator.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Dataset {field_name} must be a non-empty string.")
    for separator in _PATH_SEPARATORS:
        if separator in value:
            raise ValidationError(
                f"Invalid dataset {field_name} '{value}': "
                f"path separator '{separator}' is not allowed."
            )
