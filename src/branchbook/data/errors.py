"""Custom exceptions for data loading and validation."""
from __future__ import annotations

from typing import Iterable


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when page files are missing or cannot be decoded."""


class DataValidationError(DataError):
    """Raised when page content fails structural validation."""


class DataReferenceError(DataError):
    """Raised when pages reference each other inconsistently."""


class DuplicatePageIdError(DataReferenceError):
    """Raised when two page records share an id."""

    def __init__(self, page_ids: Iterable[int]) -> None:
        self.page_ids = sorted(set(page_ids))
        joined = ", ".join(str(page_id) for page_id in self.page_ids)
        super().__init__(f"Duplicate page ids: {joined}")
