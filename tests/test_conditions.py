import pytest

from branchbook.domain.conditions import conditions_hold, evaluate_condition
from branchbook.domain.defs import ConditionDef
from branchbook.domain.errors import UnknownFlagError
from branchbook.domain.flags import FlagStore


@pytest.mark.parametrize(
    ("cmp", "num", "expected"),
    [
        ("Less", 4, False),
        ("Less", 5, False),
        ("Less", 6, True),
        ("Equal", 5, True),
        ("Equal", 4, False),
        ("Greater", 4, True),
        ("Greater", 5, False),
        ("AtLeast", 5, True),
        ("AtLeast", 6, False),
        ("AtMost", 5, True),
        ("AtMost", 4, False),
    ],
)
def test_evaluate_condition_operators(cmp: str, num: int, expected: bool) -> None:
    flags = FlagStore.from_values({"x": 5})

    assert evaluate_condition(ConditionDef("x", cmp, num), flags) is expected


def test_evaluate_condition_handles_negative_values() -> None:
    flags = FlagStore.from_values({"x": -2})

    assert evaluate_condition(ConditionDef("x", "Less", 0), flags)
    assert evaluate_condition(ConditionDef("x", "Equal", -2), flags)


def test_undeclared_flag_raises_instead_of_false() -> None:
    flags = FlagStore(["x"])

    with pytest.raises(UnknownFlagError):
        evaluate_condition(ConditionDef("z", "Equal", 5), flags)


def test_empty_condition_list_always_holds() -> None:
    assert conditions_hold([], FlagStore())


def test_conditions_hold_requires_all() -> None:
    flags = FlagStore.from_values({"a": 1, "b": 0})
    conditions = [ConditionDef("a", "Equal", 1), ConditionDef("b", "Equal", 1)]

    assert not conditions_hold(conditions, flags)
    flags.set("b", 1)
    assert conditions_hold(conditions, flags)


def test_conditions_hold_surfaces_unknown_flag_after_false_condition() -> None:
    flags = FlagStore.from_values({"a": 0})
    conditions = [ConditionDef("a", "Equal", 1), ConditionDef("z", "Equal", 1)]

    with pytest.raises(UnknownFlagError):
        conditions_hold(conditions, flags)
