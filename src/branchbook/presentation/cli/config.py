"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

_DEFAULT_START_PAGE_ID = 0
_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Branchbook"
        return Path.home() / "Branchbook"
    return Path.home() / ".config" / "branchbook"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, object]:
    return {
        "pages_dir": None,
        "start_page_id": _DEFAULT_START_PAGE_ID,
        "log_level": _DEFAULT_LOG_LEVEL,
    }


def normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _normalize(raw: Dict[str, object]) -> Dict[str, object]:
    pages_dir = raw.get("pages_dir")
    start_page_id = raw.get("start_page_id")
    if isinstance(start_page_id, bool) or not isinstance(start_page_id, int) or start_page_id < 0:
        start_page_id = _DEFAULT_START_PAGE_ID
    return {
        "pages_dir": pages_dir if isinstance(pages_dir, str) and pages_dir else None,
        "start_page_id": start_page_id,
        "log_level": normalize_log_level(raw.get("log_level")),
    }


def load_config(path: Path | None = None) -> Dict[str, object]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return _normalize(raw)


def save_config(config: Dict[str, object], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = _normalize(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
