"""Static story graph validation utilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence

from branchbook.core.types import Severity
from branchbook.domain.defs import ActionLinkDef, ChoiceLinkDef, ConditionDef, PageDef, PageLinkDef
from branchbook.domain.flags import declared_flags


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def has_errors(issues: Sequence[Issue]) -> bool:
    return any(issue.severity == "ERROR" for issue in issues)


def validate_story_graph(
    pages: Sequence[PageDef],
    *,
    start_page_id: int | None = None,
) -> list[Issue]:
    """Return diagnostics for a sequence of page records.

    Only duplicate page ids and a missing start page are reported as errors;
    everything else is advisory and leaves the story playable.
    """
    issues: list[Issue] = []
    page_map, duplicate_ids = _index_pages(pages)
    for page_id in duplicate_ids:
        issues.append(
            Issue(
                severity="ERROR",
                code="DUPLICATE_PAGE_ID",
                message="Duplicate page id detected.",
                context={"page_id": str(page_id)},
            )
        )

    flags = set(declared_flags(pages))
    for page in page_map.values():
        _validate_links(page, page_map, flags, issues)

    if start_page_id is not None:
        if start_page_id not in page_map:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="MISSING_START_PAGE",
                    message="Start page does not exist.",
                    context={"page_id": str(start_page_id)},
                )
            )
        else:
            _validate_reachability(page_map, start_page_id, issues)
    return issues


def _index_pages(pages: Sequence[PageDef]) -> tuple[Dict[int, PageDef], list[int]]:
    page_map: Dict[int, PageDef] = {}
    duplicates: list[int] = []
    for page in pages:
        if page.id in page_map:
            if page.id not in duplicates:
                duplicates.append(page.id)
            continue
        page_map[page.id] = page
    return page_map, duplicates


def _validate_links(
    page: PageDef,
    page_map: Mapping[int, PageDef],
    flags: set[str],
    issues: list[Issue],
) -> None:
    for index, link in enumerate(page.links):
        field_path = f"links[{index}]"
        if isinstance(link, PageLinkDef):
            if link.target_id not in page_map:
                issues.append(
                    Issue(
                        severity="WARN",
                        code="DANGLING_LINK",
                        message="Page link targets a missing page.",
                        context={
                            "page_id": str(page.id),
                            "target_id": str(link.target_id),
                            "field_path": field_path,
                        },
                    )
                )
            _validate_conditions(page.id, link.conditions, flags, f"{field_path}.cond", issues)
        elif isinstance(link, ActionLinkDef):
            _validate_conditions(page.id, link.conditions, flags, f"{field_path}.cond", issues)
        elif isinstance(link, ChoiceLinkDef):
            if not link.choices:
                issues.append(
                    Issue(
                        severity="WARN",
                        code="EMPTY_CHOICE_GROUP",
                        message="Choice link has no choices and will never be shown.",
                        context={"page_id": str(page.id), "field_path": field_path},
                    )
                )
            for choice_index, choice in enumerate(link.choices):
                _validate_conditions(
                    page.id,
                    choice.conditions,
                    flags,
                    f"{field_path}.choices[{choice_index}].cond",
                    issues,
                )


def _validate_conditions(
    page_id: int,
    conditions: Sequence[ConditionDef],
    flags: set[str],
    field_path: str,
    issues: list[Issue],
) -> None:
    for index, condition in enumerate(conditions):
        if condition.flag in flags:
            continue
        issues.append(
            Issue(
                severity="WARN",
                code="UNDECLARED_FLAG",
                message="Condition references a flag no action declares; evaluating it will fail.",
                context={
                    "page_id": str(page_id),
                    "flag": condition.flag,
                    "field_path": f"{field_path}[{index}]",
                },
            )
        )


def _validate_reachability(
    page_map: Mapping[int, PageDef],
    start_page_id: int,
    issues: list[Issue],
) -> None:
    reachable: set[int] = set()
    stack: List[int] = [start_page_id]
    while stack:
        page_id = stack.pop()
        if page_id in reachable or page_id not in page_map:
            continue
        reachable.add(page_id)
        for link in page_map[page_id].links:
            if isinstance(link, PageLinkDef):
                stack.append(link.target_id)
    for page_id in sorted(set(page_map) - reachable):
        issues.append(
            Issue(
                severity="WARN",
                code="UNREACHABLE_PAGE",
                message="Page is unreachable from the start page.",
                context={"page_id": str(page_id)},
            )
        )
