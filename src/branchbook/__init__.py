"""Branching narrative engine driven by declarative page records."""

__version__ = "0.1.0"
