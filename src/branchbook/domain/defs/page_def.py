"""Page definition structures used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from branchbook.core.types import Comparison, FlagEffect


@dataclass(frozen=True, slots=True)
class FlagActionDef:
    """Single flag mutation attached to a page or an action link."""

    flag: str
    effect: FlagEffect
    modifier: int


@dataclass(frozen=True, slots=True)
class ConditionDef:
    """Guard comparing a flag's current value to a literal."""

    flag: str
    cmp: Comparison
    num: int


@dataclass(frozen=True, slots=True)
class PageLinkDef:
    """Link to another page, selectable while all conditions hold."""

    target_id: int
    text: str
    conditions: Tuple[ConditionDef, ...] = ()


@dataclass(frozen=True, slots=True)
class ActionLinkDef:
    """Link that mutates flags and keeps the reader on the same page.

    ``repeats`` of ``None`` means the action can be selected any number of times.
    """

    text: str
    actions: Tuple[FlagActionDef, ...]
    conditions: Tuple[ConditionDef, ...] = ()
    repeats: int | None = None


@dataclass(frozen=True, slots=True)
class ChoiceLinkDef:
    """Group of action links sharing a repeat budget.

    The group's ``repeats`` is independent of each choice's own limit.
    """

    choices: Tuple[ActionLinkDef, ...]
    caption: str | None = None
    repeats: int | None = None


LinkDef = Union[PageLinkDef, ActionLinkDef, ChoiceLinkDef]


@dataclass(frozen=True, slots=True)
class PageDef:
    """Fully parsed page."""

    id: int
    content: str
    actions: Tuple[FlagActionDef, ...] = ()
    links: Tuple[LinkDef, ...] = ()
