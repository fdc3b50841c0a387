"""Base repository implementation for directories of record files."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Generic, List, TypeVar

from branchbook.data.errors import DataLoadError, DataValidationError
from branchbook.data.json_loader import load_json
from branchbook.data.yaml_loader import load_yaml

T = TypeVar("T")

_LOADERS: Dict[str, Callable[[Path], object]] = {
    ".json": load_json,
    ".yml": load_yaml,
    ".yaml": load_yaml,
}


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for repositories.

    Every supported file in the directory holds exactly one record. Files are
    read in sorted filename order so the resulting sequence is deterministic.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._records: List[T] | None = None

    def _record_files(self) -> List[Path]:
        if not self._directory.is_dir():
            raise DataLoadError(f"Page directory not found: {self._directory}")
        return sorted(
            path
            for path in self._directory.iterdir()
            if path.is_file() and path.suffix.lower() in _LOADERS
        )

    def _load_raw(self, path: Path) -> dict[str, object]:
        raw = _LOADERS[path.suffix.lower()](path)
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {path}")
        return raw

    def _build(self, raw: dict[str, object], context: str) -> T:
        """Convert one raw record into a typed definition."""
        raise NotImplementedError

    def _ensure_loaded(self) -> None:
        if self._records is None:
            self._records = [
                self._build(self._load_raw(path), path.name) for path in self._record_files()
            ]

    def all(self) -> list[T]:
        """Return all records in file order."""
        self._ensure_loaded()
        assert self._records is not None
        return list(self._records)

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_list(value: object, context: str) -> list[object]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        return value
