"""Shared type aliases for the core and domain layers."""
from typing import Literal

FlagEffect = Literal["Add", "Set"]
Comparison = Literal["Less", "Equal", "Greater", "AtLeast", "AtMost"]
LinkKind = Literal["page", "action", "choice"]
Severity = Literal["ERROR", "WARN"]

FLAG_EFFECTS: tuple[FlagEffect, ...] = ("Add", "Set")
COMPARISONS: tuple[Comparison, ...] = ("Less", "Equal", "Greater", "AtLeast", "AtMost")

__all__ = [
    "COMPARISONS",
    "Comparison",
    "FLAG_EFFECTS",
    "FlagEffect",
    "LinkKind",
    "Severity",
]
