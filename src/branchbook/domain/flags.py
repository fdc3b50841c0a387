"""Narrative flag storage."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping

from branchbook.domain.defs import ActionLinkDef, ChoiceLinkDef, FlagActionDef, PageDef
from branchbook.domain.errors import UnknownFlagError


class FlagStore:
    """Mapping of single-character flag ids to signed integer values.

    The set of flags is fixed when the store is created; reading or writing a
    flag outside that set raises ``UnknownFlagError``.
    """

    def __init__(self, flags: Iterable[str] = ()) -> None:
        self._values: Dict[str, int] = {flag: 0 for flag in flags}

    @classmethod
    def from_values(cls, values: Mapping[str, int]) -> "FlagStore":
        store = cls(values.keys())
        store._values.update(values)
        return store

    def __contains__(self, flag: object) -> bool:
        return flag in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def get(self, flag: str) -> int:
        """Return the value of a declared flag."""
        try:
            return self._values[flag]
        except KeyError as exc:
            raise UnknownFlagError(flag) from exc

    def set(self, flag: str, value: int) -> None:
        """Replace the value of a declared flag."""
        if flag not in self._values:
            raise UnknownFlagError(flag)
        self._values[flag] = value

    def require(self, flags: Iterable[str]) -> None:
        """Raise ``UnknownFlagError`` for the first flag that is not declared."""
        for flag in flags:
            if flag not in self._values:
                raise UnknownFlagError(flag)

    def snapshot(self) -> Dict[str, int]:
        """Return a sorted copy of all flag values."""
        return {flag: self._values[flag] for flag in sorted(self._values)}


def iter_page_actions(page: PageDef) -> Iterator[FlagActionDef]:
    """Yield every flag action on a page: page-level, action links and choices."""
    yield from page.actions
    for link in page.links:
        if isinstance(link, ActionLinkDef):
            yield from link.actions
        elif isinstance(link, ChoiceLinkDef):
            for choice in link.choices:
                yield from choice.actions


def declared_flags(pages: Iterable[PageDef]) -> List[str]:
    """Return the sorted set of flags declared by any action in the pages."""
    return sorted({action.flag for page in pages for action in iter_page_actions(page)})
