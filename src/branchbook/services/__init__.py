"""Service layer exports."""

from .link_resolver import LinkHandle, selectable_links
from .story_graph import StoryGraph, build_story_graph
from .story_graph_validator import Issue, format_issue, validate_story_graph
from .story_service import PageView, SelectionResult, StoryService

__all__ = [
    "Issue",
    "LinkHandle",
    "PageView",
    "SelectionResult",
    "StoryGraph",
    "StoryService",
    "build_story_graph",
    "format_issue",
    "selectable_links",
    "validate_story_graph",
]
