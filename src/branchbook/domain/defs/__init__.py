"""Domain definition exports."""

from .page_def import (
    ActionLinkDef,
    ChoiceLinkDef,
    ConditionDef,
    FlagActionDef,
    LinkDef,
    PageDef,
    PageLinkDef,
)

__all__ = [
    "ActionLinkDef",
    "ChoiceLinkDef",
    "ConditionDef",
    "FlagActionDef",
    "LinkDef",
    "PageDef",
    "PageLinkDef",
]
