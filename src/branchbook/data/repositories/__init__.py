"""Repository exports."""

from .pages_repo import PagesRepository

__all__ = ["PagesRepository"]
