"""Story graph construction."""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from branchbook.data.errors import DuplicatePageIdError
from branchbook.domain.defs import LinkDef, PageDef
from branchbook.domain.errors import UnknownPageError
from branchbook.domain.flags import FlagStore, declared_flags
from branchbook.services.story_graph_validator import Issue, validate_story_graph

logger = logging.getLogger(__name__)


class StoryGraph:
    """Immutable collection of pages keyed by id.

    A graph holds no per-reader state and can be shared by any number of
    sessions.
    """

    def __init__(self, pages: Dict[int, PageDef], flags: Sequence[str]) -> None:
        self._pages = dict(pages)
        self._flags: Tuple[str, ...] = tuple(sorted(flags))

    @property
    def page_ids(self) -> List[int]:
        return sorted(self._pages)

    @property
    def declared_flags(self) -> Tuple[str, ...]:
        return self._flags

    def has_page(self, page_id: int) -> bool:
        return page_id in self._pages

    def page(self, page_id: int) -> PageDef:
        """Return a page by id."""
        try:
            return self._pages[page_id]
        except KeyError as exc:
            raise UnknownPageError(page_id) from exc

    def pages(self) -> List[PageDef]:
        """Return all pages sorted by id."""
        return [self._pages[page_id] for page_id in sorted(self._pages)]

    def link(self, page_id: int, link_index: int) -> LinkDef:
        return self.page(page_id).links[link_index]

    def new_flag_store(self) -> FlagStore:
        """Return a fresh store with every declared flag at zero."""
        return FlagStore(self._flags)

    def __len__(self) -> int:
        return len(self._pages)


def build_story_graph(
    pages: Sequence[PageDef],
    *,
    start_page_id: int | None = None,
) -> tuple[StoryGraph, list[Issue]]:
    """Build a story graph and return it with its diagnostics.

    Raises ``DuplicatePageIdError`` when two records share an id. Dangling
    links and the other advisory issues are returned, not raised.
    """
    issues = validate_story_graph(pages, start_page_id=start_page_id)
    duplicates = [int(issue.context["page_id"]) for issue in issues if issue.code == "DUPLICATE_PAGE_ID"]
    if duplicates:
        raise DuplicatePageIdError(duplicates)

    flags = declared_flags(pages)
    graph = StoryGraph({page.id: page for page in pages}, flags)
    logger.debug(
        "Built story graph: pages=%d flags=%s issues=%d", len(graph), "".join(flags), len(issues)
    )
    return graph, issues
