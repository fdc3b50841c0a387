"""Exceptions raised while evaluating or navigating a story."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from branchbook.services.link_resolver import LinkHandle


class EngineError(Exception):
    """Base exception for the narrative engine."""


class UnknownFlagError(EngineError):
    """Raised when a condition or action references an undeclared flag."""

    def __init__(self, flag: str) -> None:
        super().__init__(f"Flag '{flag}' is not declared by any action in the story.")
        self.flag = flag


class UnknownPageError(EngineError):
    """Raised when a page id does not exist in the story graph."""

    def __init__(self, page_id: int) -> None:
        super().__init__(f"Page {page_id} does not exist in the story graph.")
        self.page_id = page_id


class InvalidSelectionError(EngineError):
    """Raised when a selection is not among the currently selectable links."""

    def __init__(self, handle: "LinkHandle", page_id: int) -> None:
        super().__init__(f"Link {handle!r} is not selectable on page {page_id}.")
        self.handle = handle
        self.page_id = page_id
