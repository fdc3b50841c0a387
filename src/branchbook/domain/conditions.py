"""Condition evaluation against the flag store."""
from __future__ import annotations

import operator
from typing import Callable, Dict, Iterable

from branchbook.core.types import Comparison
from branchbook.domain.defs import ConditionDef
from branchbook.domain.flags import FlagStore

_COMPARATORS: Dict[Comparison, Callable[[int, int], bool]] = {
    "Less": operator.lt,
    "Equal": operator.eq,
    "Greater": operator.gt,
    "AtLeast": operator.ge,
    "AtMost": operator.le,
}


def evaluate_condition(condition: ConditionDef, flags: FlagStore) -> bool:
    """Compare the flag's stored value against the condition operand.

    Raises ``UnknownFlagError`` if the flag is absent from the store.
    """
    value = flags.get(condition.flag)
    return _COMPARATORS[condition.cmp](value, condition.num)


def conditions_hold(conditions: Iterable[ConditionDef], flags: FlagStore) -> bool:
    """Return True when every condition holds; an empty list always holds."""
    results = [evaluate_condition(condition, flags) for condition in conditions]
    return all(results)
