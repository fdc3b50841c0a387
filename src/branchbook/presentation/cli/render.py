"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Sequence

from branchbook.services import LinkHandle

_TEXT_WIDTH = 72


def debug_enabled() -> bool:
    """Return True only when BRANCHBOOK_DEBUG is explicitly set to '1'."""
    return os.getenv("BRANCHBOOK_DEBUG") == "1"


def wrap_paragraphs(text: str, width: int = _TEXT_WIDTH) -> list[str]:
    """Wrap each paragraph on word boundaries, keeping blank lines between them."""
    lines: list[str] = []
    for paragraph in text.strip().split("\n\n"):
        if lines:
            lines.append("")
        joined = " ".join(paragraph.split())
        lines.extend(
            textwrap.wrap(joined, width=width, break_long_words=False, break_on_hyphens=False)
            or [""]
        )
    return lines


def link_labels(links: Sequence[LinkHandle]) -> list[str]:
    """Return display labels, prefixing choice entries with their group caption."""
    labels: list[str] = []
    for link in links:
        if link.kind == "choice" and link.caption:
            labels.append(f"{link.caption}: {link.text}")
        else:
            labels.append(link.text)
    return labels


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_page(page_id: int, content: str) -> None:
    """Render page content with the page id in debug mode."""
    render_heading("Story")
    if debug_enabled():
        print(f"[page {page_id}]")
    for line in wrap_paragraphs(content):
        print(line)


def render_links(links: Sequence[LinkHandle]) -> None:
    """Display numbered selectable links."""
    if not links:
        return
    render_heading("Choices")
    for idx, label in enumerate(link_labels(links), start=1):
        print(f"{idx}. {label}")

