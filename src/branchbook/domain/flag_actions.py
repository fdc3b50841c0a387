"""Application of flag actions to the flag store."""
from __future__ import annotations

from typing import Sequence

from branchbook.core.types import FLAG_EFFECTS
from branchbook.domain.defs import FlagActionDef
from branchbook.domain.flags import FlagStore


def apply_action(action: FlagActionDef, flags: FlagStore) -> int:
    """Apply one action and return the flag's new value."""
    current = flags.get(action.flag)
    if action.effect == "Add":
        new_value = current + action.modifier
    elif action.effect == "Set":
        new_value = action.modifier
    else:
        raise ValueError(f"Unsupported flag effect '{action.effect}'.")
    flags.set(action.flag, new_value)
    return new_value


def apply_actions(actions: Sequence[FlagActionDef], flags: FlagStore) -> None:
    """Apply actions in declaration order.

    Every action is checked before the first mutation, so a batch either
    applies completely or leaves the store untouched.
    """
    for action in actions:
        if action.effect not in FLAG_EFFECTS:
            raise ValueError(f"Unsupported flag effect '{action.effect}'.")
    flags.require(action.flag for action in actions)
    for action in actions:
        apply_action(action, flags)
