"""Console-driven reading loop for branchbook."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from branchbook.data import DataError
from branchbook.data.repositories import PagesRepository
from branchbook.domain.errors import EngineError, UnknownPageError
from branchbook.domain.state import SessionState
from branchbook.presentation.cli import render
from branchbook.presentation.cli.config import load_config, normalize_log_level
from branchbook.services import (
    Issue,
    StoryGraph,
    StoryService,
    build_story_graph,
    format_issue,
)
from branchbook.services.story_graph_validator import has_errors

logger = logging.getLogger(__name__)

_QUIT_INPUTS = {"q", "quit", "exit"}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="branchbook",
        description="Read a branching story built from a directory of page files.",
    )
    parser.add_argument("--pages", help="Directory containing .yml/.yaml/.json page files.")
    parser.add_argument("--start", type=int, help="Id of the page the story starts on.")
    parser.add_argument("--config", help="Path to a JSON config file.")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the story, print diagnostics and exit.",
    )
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...).")
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, normalize_log_level(level)),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive CLI session and return a process exit code."""
    args = parse_args(argv)
    config = load_config(Path(args.config) if args.config else None)
    if args.log_level:
        level = args.log_level
    elif render.debug_enabled():
        level = "DEBUG"
    else:
        level = str(config["log_level"])
    configure_logging(level)

    pages_dir = args.pages or config["pages_dir"]
    start_page_id = args.start if args.start is not None else int(config["start_page_id"])
    try:
        graph, issues = load_story(pages_dir, start_page_id)
    except DataError as exc:
        print(f"Unable to load story: {exc}")
        return 1
    log_issues(issues)

    if args.check:
        return _report_check(graph, issues)

    service = StoryService(graph, start_page_id=start_page_id)
    try:
        state = service.start_session()
        run_story_loop(service, state)
    except EngineError as exc:
        logger.error("Story stopped: %s", exc)
        print(f"The story cannot continue: {exc}")
        return 1
    print("Goodbye!")
    return 0


def load_story(
    pages_dir: Path | str | None, start_page_id: int | None
) -> tuple[StoryGraph, list[Issue]]:
    """Load page files and build the story graph."""
    repo = PagesRepository(base_path=pages_dir)
    pages = repo.all()
    logger.info("Loaded %d page files", len(pages))
    return build_story_graph(pages, start_page_id=start_page_id)


def log_issues(issues: Sequence[Issue]) -> None:
    for issue in issues:
        if issue.severity == "ERROR":
            logger.error(format_issue(issue))
        else:
            logger.warning(format_issue(issue))


def _report_check(graph: StoryGraph, issues: Sequence[Issue]) -> int:
    for issue in issues:
        print(format_issue(issue))
    errors = sum(1 for issue in issues if issue.severity == "ERROR")
    print(
        "Story validation summary: "
        f"pages={len(graph)} flags={len(graph.declared_flags)} "
        f"errors={errors} warnings={len(issues) - errors}"
    )
    return 1 if has_errors(issues) else 0


def run_story_loop(service: StoryService, state: SessionState) -> None:
    """Render pages and apply selections until a dead end or the reader quits."""
    while True:
        view = service.get_current_page_view(state)
        render.render_page(view.page_id, view.content)
        if view.is_dead_end:
            print("\nThe End.")
            return
        render.render_links(view.links)
        choice_index = _prompt_choice(len(view.links))
        if choice_index is None:
            return
        try:
            service.select(state, view.links[choice_index])
        except UnknownPageError as exc:
            logger.warning("Dangling link selected on page %d: %s", view.page_id, exc)
            print("That path leads nowhere yet. Pick another.")


def _prompt_choice(choice_count: int) -> int | None:
    while True:
        raw = input("Select an option (q to quit): ").strip()
        if raw.lower() in _QUIT_INPUTS:
            return None
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if 0 <= index < choice_count:
            return index
        print(f"Please enter a value between 1 and {choice_count}.")
