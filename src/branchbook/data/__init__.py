"""Data layer utilities for loading page files."""

from .errors import (
    DataError,
    DataLoadError,
    DataReferenceError,
    DataValidationError,
    DuplicatePageIdError,
)
from .paths import get_pages_path, get_repo_root

__all__ = [
    "DataError",
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "DuplicatePageIdError",
    "get_pages_path",
    "get_repo_root",
]
