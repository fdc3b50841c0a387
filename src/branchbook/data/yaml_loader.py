"""Low-level YAML helpers for repositories."""
from __future__ import annotations

from pathlib import Path

import yaml

from .errors import DataLoadError


def load_yaml(path: Path) -> object:
    """Load a single YAML document from disk and raise DataLoadError on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Page file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read page file: {path}") from exc

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DataLoadError(f"Invalid YAML in {path}: {exc}") from exc
