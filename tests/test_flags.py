import pytest

from branchbook.domain.defs import (
    ActionLinkDef,
    ChoiceLinkDef,
    ConditionDef,
    FlagActionDef,
    PageDef,
    PageLinkDef,
)
from branchbook.domain.errors import UnknownFlagError
from branchbook.domain.flags import FlagStore, declared_flags


def test_flag_store_defaults_to_zero() -> None:
    store = FlagStore(["a", "b"])

    assert store.get("a") == 0
    assert store.snapshot() == {"a": 0, "b": 0}
    assert "a" in store
    assert "z" not in store


def test_flag_store_rejects_unknown_flags() -> None:
    store = FlagStore(["a"])

    with pytest.raises(UnknownFlagError) as excinfo:
        store.get("z")
    assert excinfo.value.flag == "z"
    with pytest.raises(UnknownFlagError):
        store.set("z", 1)


def test_flag_store_from_values_keeps_signed_values() -> None:
    store = FlagStore.from_values({"a": -4, "b": 7})

    assert store.get("a") == -4
    assert list(store) == ["a", "b"]
    assert len(store) == 2


def test_declared_flags_collects_every_action_source() -> None:
    pages = [
        PageDef(
            id=0,
            content="",
            actions=(FlagActionDef("p", "Set", 1),),
            links=(
                ActionLinkDef(text="act", actions=(FlagActionDef("a", "Add", 1),)),
                ChoiceLinkDef(
                    choices=(ActionLinkDef(text="pick", actions=(FlagActionDef("c", "Add", 1),)),)
                ),
                PageLinkDef(target_id=1, text="go", conditions=(ConditionDef("z", "Equal", 1),)),
            ),
        )
    ]

    assert declared_flags(pages) == ["a", "c", "p"]
