from branchbook.domain.defs import (
    ActionLinkDef,
    ChoiceLinkDef,
    ConditionDef,
    FlagActionDef,
    PageDef,
    PageLinkDef,
)
from branchbook.services.story_graph_validator import Issue, format_issue, has_errors, validate_story_graph


def test_duplicate_ids_are_errors() -> None:
    issues = validate_story_graph([PageDef(id=0, content=""), PageDef(id=0, content="")])

    assert [issue.code for issue in issues] == ["DUPLICATE_PAGE_ID"]
    assert has_errors(issues)


def test_dangling_link_warns_with_page_and_target() -> None:
    pages = [PageDef(id=0, content="", links=(PageLinkDef(target_id=4, text="x"),))]

    issues = validate_story_graph(pages)

    assert any(
        issue.code == "DANGLING_LINK" and issue.context["target_id"] == "4" for issue in issues
    )
    assert not has_errors(issues)


def test_undeclared_flag_in_choice_warns() -> None:
    pages = [
        PageDef(
            id=0,
            content="",
            links=(
                ChoiceLinkDef(
                    choices=(
                        ActionLinkDef(
                            text="x",
                            actions=(FlagActionDef("a", "Add", 1),),
                            conditions=(ConditionDef("q", "Equal", 0),),
                        ),
                    )
                ),
            ),
        )
    ]

    issues = validate_story_graph(pages)

    assert [issue.code for issue in issues] == ["UNDECLARED_FLAG"]
    assert issues[0].context["field_path"] == "links[0].choices[0].cond[0]"


def test_empty_choice_group_warns() -> None:
    issues = validate_story_graph([PageDef(id=0, content="", links=(ChoiceLinkDef(choices=()),))])

    assert any(issue.code == "EMPTY_CHOICE_GROUP" for issue in issues)


def test_unreachable_page_warns() -> None:
    pages = [
        PageDef(id=0, content="", links=(PageLinkDef(target_id=1, text="go"),)),
        PageDef(id=1, content=""),
        PageDef(id=2, content=""),
    ]

    issues = validate_story_graph(pages, start_page_id=0)

    assert [issue.context["page_id"] for issue in issues if issue.code == "UNREACHABLE_PAGE"] == ["2"]


def test_missing_start_page_is_an_error() -> None:
    issues = validate_story_graph([PageDef(id=1, content="")], start_page_id=0)

    assert any(issue.code == "MISSING_START_PAGE" for issue in issues)
    assert has_errors(issues)


def test_format_issue() -> None:
    issue = Issue(
        severity="WARN",
        code="DANGLING_LINK",
        message="Page link targets a missing page.",
        context={"page_id": "1", "target_id": "9"},
    )

    assert format_issue(issue) == (
        "[WARN] DANGLING_LINK: Page link targets a missing page. (page_id=1 target_id=9)"
    )
