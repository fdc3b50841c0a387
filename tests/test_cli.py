import json
from pathlib import Path

import pytest

from branchbook.presentation.cli import app
from branchbook.presentation.cli.config import default_config, load_config, save_config
from branchbook.presentation.cli.render import link_labels, wrap_paragraphs
from branchbook.services.link_resolver import LinkHandle


def _write_story(directory: Path) -> Path:
    pages = [
        {
            "id": 0,
            "content": "A locked door.",
            "links": [
                {
                    "action": {
                        "text": "Find the key",
                        "actions": [{"flag": "k", "effect": "Set", "modifier": 1}],
                        "repeats": 1,
                    }
                },
                {
                    "page": {
                        "id": 1,
                        "text": "Open the door",
                        "cond": [{"flag": "k", "cmp": "Equal", "num": 1}],
                    }
                },
                {"page": {"id": 9, "text": "Climb the wall"}},
            ],
        },
        {"id": 1, "content": "Daylight.", "links": []},
    ]
    for page in pages:
        (directory / f"{page['id']:02d}.json").write_text(json.dumps(page), encoding="utf-8")
    return directory


def _feed_inputs(monkeypatch: pytest.MonkeyPatch, answers: list[str]) -> None:
    remaining = iter(answers)
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(remaining))


def test_story_loop_reaches_dead_end(tmp_path: Path, monkeypatch, capsys) -> None:
    pages_dir = _write_story(tmp_path)
    _feed_inputs(monkeypatch, ["abc", "1", "2", "1"])

    exit_code = app.main(["--pages", str(pages_dir), "--config", str(tmp_path / "none.json")])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Please enter a number." in output
    assert "That path leads nowhere yet." in output
    assert "Daylight." in output
    assert "The End." in output


def test_story_loop_quits_on_q(tmp_path: Path, monkeypatch, capsys) -> None:
    pages_dir = _write_story(tmp_path)
    _feed_inputs(monkeypatch, ["q"])

    exit_code = app.main(["--pages", str(pages_dir), "--config", str(tmp_path / "none.json")])

    assert exit_code == 0
    assert "Goodbye!" in capsys.readouterr().out


def test_check_reports_dangling_link(tmp_path: Path, capsys) -> None:
    pages_dir = _write_story(tmp_path)

    exit_code = app.main(
        ["--pages", str(pages_dir), "--check", "--config", str(tmp_path / "none.json")]
    )

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "DANGLING_LINK" in output
    assert "pages=2" in output


def test_duplicate_pages_abort_startup(tmp_path: Path, capsys) -> None:
    for name in ("a.json", "b.json"):
        (tmp_path / name).write_text(json.dumps({"id": 0, "content": "", "links": []}), encoding="utf-8")

    exit_code = app.main(["--pages", str(tmp_path), "--config", str(tmp_path / "none.json")])

    assert exit_code == 1
    assert "Duplicate page ids: 0" in capsys.readouterr().out


def test_config_defaults_when_missing(tmp_path: Path) -> None:
    assert load_config(tmp_path / "missing.json") == default_config()


def test_config_round_trip_normalizes_values(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    save_config({"pages_dir": "story", "start_page_id": -3, "log_level": "debug"}, path)

    assert load_config(path) == {"pages_dir": "story", "start_page_id": 0, "log_level": "DEBUG"}


def test_config_ignores_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(path) == default_config()


def test_link_labels_prefix_choice_caption() -> None:
    links = [
        LinkHandle(0, 0, "page", "Go"),
        LinkHandle(0, 1, "choice", "Left", choice_index=0, caption="Which way?"),
        LinkHandle(0, 2, "choice", "Wait", choice_index=0),
    ]

    assert link_labels(links) == ["Go", "Which way?: Left", "Wait"]


def test_wrap_paragraphs_keeps_breaks() -> None:
    text = "First paragraph that is rather long for the width.\n\nSecond."

    lines = wrap_paragraphs(text, width=20)

    assert "" in lines
    assert lines[-1] == "Second."
    assert all(len(line) <= 20 for line in lines)
