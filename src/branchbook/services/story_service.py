"""Story progression services."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, assert_never

from branchbook.domain.defs import ActionLinkDef, ChoiceLinkDef, FlagActionDef, PageLinkDef
from branchbook.domain.errors import InvalidSelectionError, UnknownPageError
from branchbook.domain.flag_actions import apply_actions
from branchbook.domain.state import SessionState
from branchbook.services.link_resolver import LinkHandle, selectable_links
from branchbook.services.story_graph import StoryGraph

logger = logging.getLogger(__name__)

START_PAGE_ID = 0


@dataclass(slots=True)
class PageView:
    """Data returned to the presentation layer for rendering."""

    page_id: int
    content: str
    links: List[LinkHandle]

    @property
    def is_dead_end(self) -> bool:
        return not self.links


@dataclass(slots=True)
class SelectionResult:
    """Result returned after applying a selection."""

    previous_page_id: int
    page_id: int
    moved: bool
    applied_actions: List[FlagActionDef] = field(default_factory=list)


class StoryService:
    """Application service that drives a reader through the story graph."""

    def __init__(self, graph: StoryGraph, *, start_page_id: int = START_PAGE_ID) -> None:
        self._graph = graph
        self._start_page_id = start_page_id

    def start_session(self, start_page_id: int | None = None) -> SessionState:
        """Create a fresh session positioned on the start page."""
        page_id = self._start_page_id if start_page_id is None else start_page_id
        if not self._graph.has_page(page_id):
            raise UnknownPageError(page_id)
        state = SessionState(current_page_id=page_id, flags=self._graph.new_flag_store())
        self._enter_page(state, page_id)
        logger.info("Started session on page %d with flags %s", page_id, state.flags.snapshot())
        return state

    def current_content(self, page_id: int) -> str:
        return self._graph.page(page_id).content

    def list_selectable(self, state: SessionState, page_id: int | None = None) -> List[LinkHandle]:
        """Return the currently selectable links, defaulting to the current page."""
        target = state.current_page_id if page_id is None else page_id
        return selectable_links(self._graph, target, state)

    def get_current_page_view(self, state: SessionState) -> PageView:
        """Return the view model for the currently active page."""
        page = self._graph.page(state.current_page_id)
        return PageView(
            page_id=page.id,
            content=page.content,
            links=self.list_selectable(state),
        )

    def select(self, state: SessionState, handle: LinkHandle) -> SelectionResult:
        """Apply the selected link and advance the story.

        The handle must be one of ``list_selectable(state)``. On any failure
        the session is left exactly as it was.
        """
        previous_page_id = state.current_page_id
        if handle not in self.list_selectable(state):
            raise InvalidSelectionError(handle, previous_page_id)

        link = self._graph.link(handle.page_id, handle.link_index)
        if isinstance(link, PageLinkDef):
            if not self._graph.has_page(link.target_id):
                raise UnknownPageError(link.target_id)
            applied = self._enter_page(state, link.target_id)
            logger.debug("Page %d -> %d via '%s'", previous_page_id, link.target_id, link.text)
        elif isinstance(link, ActionLinkDef):
            applied = self._apply_action_link(state, link, handle)
        elif isinstance(link, ChoiceLinkDef):
            assert handle.choice_index is not None
            applied = self._apply_action_link(state, link.choices[handle.choice_index], handle)
        else:
            assert_never(link)
        return SelectionResult(
            previous_page_id=previous_page_id,
            page_id=state.current_page_id,
            moved=isinstance(link, PageLinkDef),
            applied_actions=applied,
        )

    def _enter_page(self, state: SessionState, page_id: int) -> List[FlagActionDef]:
        """Move state to the given page, applying its page-level actions."""
        page = self._graph.page(page_id)
        apply_actions(page.actions, state.flags)
        state.current_page_id = page_id
        state.history.append(page_id)
        return list(page.actions)

    def _apply_action_link(
        self, state: SessionState, link: ActionLinkDef, handle: LinkHandle
    ) -> List[FlagActionDef]:
        apply_actions(link.actions, state.flags)
        used = state.counters.increment(handle.counter_key)
        if handle.group_key is not None:
            state.counters.increment(handle.group_key)
        logger.debug(
            "Applied '%s' on page %d (used=%d): %s",
            link.text,
            handle.page_id,
            used,
            _describe_actions(link.actions),
        )
        return list(link.actions)


def _describe_actions(actions: Sequence[FlagActionDef]) -> str:
    return ", ".join(f"{action.flag} {action.effect} {action.modifier}" for action in actions)
