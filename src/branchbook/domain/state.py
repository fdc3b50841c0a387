"""Domain-level session state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple

from branchbook.domain.flags import FlagStore


class CounterKey(NamedTuple):
    """Position of an action link or choice group within the story graph.

    ``choice_index`` is None for standalone action links and for the choice
    group itself.
    """

    page_id: int
    link_index: int
    choice_index: int | None = None


class UsageCounters:
    """Per-session selection counts, kept apart from the immutable graph."""

    def __init__(self) -> None:
        self._counts: Dict[CounterKey, int] = {}

    def used(self, key: CounterKey) -> int:
        return self._counts.get(key, 0)

    def increment(self, key: CounterKey) -> int:
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return count


@dataclass
class SessionState:
    """Mutable narrative state owned by a single reading session."""

    current_page_id: int
    flags: FlagStore
    counters: UsageCounters = field(default_factory=UsageCounters)
    history: List[int] = field(default_factory=list)
