"""Repository for page definitions."""
from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from branchbook.core.types import COMPARISONS, FLAG_EFFECTS
from branchbook.data import paths
from branchbook.data.errors import DataValidationError
from branchbook.data.repositories.base import RepositoryBase
from branchbook.domain.defs import (
    ActionLinkDef,
    ChoiceLinkDef,
    ConditionDef,
    FlagActionDef,
    LinkDef,
    PageDef,
    PageLinkDef,
)

_LINK_KINDS = ("page", "action", "choice")


class PagesRepository(RepositoryBase[PageDef]):
    """Loads page files and validates their structure.

    Duplicate page ids are left in the returned sequence; rejecting them is
    the story graph builder's job.
    """

    def __init__(self, base_path: Path | str | None = None) -> None:
        super().__init__(paths.get_pages_path(base_path))

    def _build(self, raw: dict[str, object], context: str) -> PageDef:
        page_id = self._require_non_negative(raw.get("id"), f"{context} id")
        page_ctx = f"{context} page {page_id}"
        content = self._require_str(raw.get("content"), f"{page_ctx} content")
        actions = self._parse_actions(raw.get("actions"), f"{page_ctx} actions", optional=True)
        raw_links = raw.get("links", [])
        links = [
            self._parse_link(entry, f"{page_ctx} links[{index}]")
            for index, entry in enumerate(self._require_list(raw_links, f"{page_ctx} links"))
        ]
        return PageDef(id=page_id, content=content, actions=actions, links=tuple(links))

    def _parse_link(self, raw_link: object, context: str) -> LinkDef:
        link_data = self._require_mapping(raw_link, context)
        kinds = [kind for kind in _LINK_KINDS if kind in link_data]
        if len(kinds) != 1 or len(link_data) != 1:
            raise DataValidationError(
                f"{context} must have exactly one of: {', '.join(_LINK_KINDS)}."
            )
        kind = kinds[0]
        payload = self._require_mapping(link_data[kind], f"{context}.{kind}")
        if kind == "page":
            return PageLinkDef(
                target_id=self._require_non_negative(payload.get("id"), f"{context}.page id"),
                text=self._require_str(payload.get("text"), f"{context}.page text"),
                conditions=self._parse_conditions(payload.get("cond"), f"{context}.page cond"),
            )
        if kind == "action":
            return self._parse_action_link(payload, f"{context}.action")
        caption = payload.get("caption")
        if caption is not None:
            caption = self._require_str(caption, f"{context}.choice caption")
        raw_choices = self._require_list(payload.get("choices"), f"{context}.choice choices")
        choices = tuple(
            self._parse_action_link(
                self._require_mapping(entry, f"{context}.choice choices[{index}]"),
                f"{context}.choice choices[{index}]",
            )
            for index, entry in enumerate(raw_choices)
        )
        self._reject_used(payload, f"{context}.choice")
        return ChoiceLinkDef(
            choices=choices,
            caption=caption,
            repeats=self._parse_repeats(payload.get("repeats"), f"{context}.choice repeats"),
        )

    def _parse_action_link(self, payload: dict[str, object], context: str) -> ActionLinkDef:
        actions = self._parse_actions(payload.get("actions"), f"{context} actions", optional=False)
        if not actions:
            raise DataValidationError(f"{context} actions must contain at least one action.")
        self._reject_used(payload, context)
        return ActionLinkDef(
            text=self._require_str(payload.get("text"), f"{context} text"),
            actions=actions,
            conditions=self._parse_conditions(payload.get("cond"), f"{context} cond"),
            repeats=self._parse_repeats(payload.get("repeats"), f"{context} repeats"),
        )

    def _parse_actions(
        self, raw_actions: object, context: str, *, optional: bool
    ) -> Tuple[FlagActionDef, ...]:
        if raw_actions is None and optional:
            return ()
        actions: List[FlagActionDef] = []
        for index, entry in enumerate(self._require_list(raw_actions, context)):
            action_ctx = f"{context}[{index}]"
            action_data = self._require_mapping(entry, action_ctx)
            effect = self._require_str(action_data.get("effect"), f"{action_ctx} effect")
            if effect not in FLAG_EFFECTS:
                raise DataValidationError(
                    f"{action_ctx} effect must be one of: {', '.join(FLAG_EFFECTS)}."
                )
            actions.append(
                FlagActionDef(
                    flag=self._require_flag(action_data.get("flag"), f"{action_ctx} flag"),
                    effect=effect,
                    modifier=self._require_int(action_data.get("modifier"), f"{action_ctx} modifier"),
                )
            )
        return tuple(actions)

    def _parse_conditions(self, raw_conditions: object, context: str) -> Tuple[ConditionDef, ...]:
        if raw_conditions is None:
            return ()
        conditions: List[ConditionDef] = []
        for index, entry in enumerate(self._require_list(raw_conditions, context)):
            cond_ctx = f"{context}[{index}]"
            cond_data = self._require_mapping(entry, cond_ctx)
            cmp = self._require_str(cond_data.get("cmp"), f"{cond_ctx} cmp")
            if cmp not in COMPARISONS:
                raise DataValidationError(
                    f"{cond_ctx} cmp must be one of: {', '.join(COMPARISONS)}."
                )
            conditions.append(
                ConditionDef(
                    flag=self._require_flag(cond_data.get("flag"), f"{cond_ctx} flag"),
                    cmp=cmp,
                    num=self._require_int(cond_data.get("num"), f"{cond_ctx} num"),
                )
            )
        return tuple(conditions)

    def _parse_repeats(self, value: object, context: str) -> int | None:
        if value is None:
            return None
        return self._require_non_negative(value, context)

    def _require_non_negative(self, value: object, context: str) -> int:
        number = self._require_int(value, context)
        if number < 0:
            raise DataValidationError(f"{context} must not be negative.")
        return number

    def _require_flag(self, value: object, context: str) -> str:
        flag = self._require_str(value, context)
        if len(flag) != 1:
            raise DataValidationError(f"{context} must be a single character.")
        return flag

    @staticmethod
    def _reject_used(payload: dict[str, object], context: str) -> None:
        if "used" in payload:
            raise DataValidationError(f"{context} used is runtime state and cannot be authored.")
