"""Resolution of the links a reader can currently select."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, assert_never

from branchbook.core.types import LinkKind
from branchbook.domain.conditions import conditions_hold
from branchbook.domain.defs import ActionLinkDef, ChoiceLinkDef, PageLinkDef
from branchbook.domain.state import CounterKey, SessionState
from branchbook.services.story_graph import StoryGraph


@dataclass(frozen=True, slots=True)
class LinkHandle:
    """Stable reference to one selectable link position on a page.

    ``choice_index`` is set only for entries inside a choice group, whose
    ``caption`` is carried along for display.
    """

    page_id: int
    link_index: int
    kind: LinkKind
    text: str
    choice_index: int | None = None
    caption: str | None = None

    @property
    def counter_key(self) -> CounterKey:
        return CounterKey(self.page_id, self.link_index, self.choice_index)

    @property
    def group_key(self) -> CounterKey | None:
        if self.kind != "choice":
            return None
        return CounterKey(self.page_id, self.link_index)


def within_repeats(repeats: int | None, used: int) -> bool:
    return repeats is None or used < repeats


def selectable_links(graph: StoryGraph, page_id: int, state: SessionState) -> List[LinkHandle]:
    """Return the selectable links of a page in declaration order.

    Page links pointing at missing pages are still returned; failing on them
    is left to selection. ``UnknownFlagError`` propagates to the caller.
    """
    page = graph.page(page_id)
    handles: List[LinkHandle] = []
    for link_index, link in enumerate(page.links):
        if isinstance(link, PageLinkDef):
            if conditions_hold(link.conditions, state.flags):
                handles.append(LinkHandle(page_id, link_index, "page", link.text))
        elif isinstance(link, ActionLinkDef):
            key = CounterKey(page_id, link_index)
            if _action_selectable(link, key, state):
                handles.append(LinkHandle(page_id, link_index, "action", link.text))
        elif isinstance(link, ChoiceLinkDef):
            if not within_repeats(link.repeats, state.counters.used(CounterKey(page_id, link_index))):
                continue
            for choice_index, choice in enumerate(link.choices):
                key = CounterKey(page_id, link_index, choice_index)
                if _action_selectable(choice, key, state):
                    handles.append(
                        LinkHandle(
                            page_id,
                            link_index,
                            "choice",
                            choice.text,
                            choice_index=choice_index,
                            caption=link.caption,
                        )
                    )
        else:
            assert_never(link)
    return handles


def _action_selectable(link: ActionLinkDef, key: CounterKey, state: SessionState) -> bool:
    if not conditions_hold(link.conditions, state.flags):
        return False
    return within_repeats(link.repeats, state.counters.used(key))
