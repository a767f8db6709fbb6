"""Tests for the idea commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from kirit.main import app


def _ideas(data_dir: Path) -> list[dict]:
    return json.loads((data_dir / "ideas.json").read_text(encoding="utf-8"))


@pytest.fixture
def seeded(data_dir: Path) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    ideas = [
        {"id": "i0", "content": "Solar kettle", "votes": 3, "status": "new", "createdAt": ""},
        {"id": "i1", "content": "Rain alarm", "votes": 1, "status": "wip", "createdAt": ""},
        {"id": "i2", "content": "Plant robot", "votes": 3, "status": "mystery", "createdAt": ""},
    ]
    (data_dir / "ideas.json").write_text(json.dumps(ideas, indent=2), encoding="utf-8")
    return data_dir


def test_idea_capture(runner: CliRunner, data_dir: Path) -> None:
    result = runner.invoke(app, ["i", "Pocket", "greenhouse"])

    assert result.exit_code == 0, result.output
    assert "Idea captured!" in result.output
    idea = _ideas(data_dir)[0]
    assert idea["content"] == "Pocket greenhouse"
    assert idea["votes"] == 0
    assert idea["status"] == "new"


def test_idea_empty(runner: CliRunner, data_dir: Path) -> None:
    result = runner.invoke(app, ["idea"], input="\n")

    assert result.exit_code == 1
    assert "Idea cannot be empty" in result.output


def test_list_empty(runner: CliRunner) -> None:
    result = runner.invoke(app, ["ideas"])
    assert "No ideas captured yet" in result.output


def test_list_in_storage_order(runner: CliRunner, seeded: Path) -> None:
    result = runner.invoke(app, ["ideas"])

    assert result.exit_code == 0, result.output
    output = result.output
    assert output.index("Solar kettle") < output.index("Rain alarm") < output.index("Plant robot")
    assert "○ Plant robot" in output


@pytest.mark.parametrize("args", [["--sort", "votes"], ["-S", "VOTES"], ["--SORT", "votes"]])
def test_sort_by_votes_is_stable(runner: CliRunner, seeded: Path, args: list[str]) -> None:
    result = runner.invoke(app, ["ideas", *args])

    assert result.exit_code == 0, result.output
    output = result.output
    assert output.index("Solar kettle") < output.index("Plant robot") < output.index("Rain alarm")
    # printed positions are storage positions
    assert "3. " in output
    assert "kirit upvote 2" in output


def test_unknown_sort_key(runner: CliRunner, seeded: Path) -> None:
    result = runner.invoke(app, ["ideas", "--sort", "alpha"])
    assert result.exit_code == 1
    assert "Unknown sort key" in result.output


def test_upvote_increments_only_votes(runner: CliRunner, seeded: Path) -> None:
    before = _ideas(seeded)

    result = runner.invoke(app, ["up", "2"])

    assert result.exit_code == 0, result.output
    assert "Upvoted! (votes: 2)" in result.output
    after = _ideas(seeded)
    assert after[1]["votes"] == 2
    after[1]["votes"] = before[1]["votes"]
    assert after == before


def test_upvote_out_of_range(runner: CliRunner, seeded: Path) -> None:
    before = (seeded / "ideas.json").read_bytes()

    result = runner.invoke(app, ["upvote", "99"])

    assert result.exit_code == 1
    assert "Idea not found" in result.output
    assert (seeded / "ideas.json").read_bytes() == before


def test_remove_idea(runner: CliRunner, seeded: Path) -> None:
    result = runner.invoke(app, ["ir", "1"])

    assert result.exit_code == 0, result.output
    assert [i["id"] for i in _ideas(seeded)] == ["i1", "i2"]


def test_malformed_idea_does_not_cost_the_rest(runner: CliRunner, data_dir: Path) -> None:
    data_dir.mkdir(parents=True, exist_ok=True)
    bad = {"id": "a2", "content": "Broken", "votes": -1, "status": "new", "createdAt": ""}
    ideas = [{"id": "a1", "content": "Keep me", "votes": 4, "status": "new", "createdAt": ""}, bad]
    (data_dir / "ideas.json").write_text(json.dumps(ideas), encoding="utf-8")

    result = runner.invoke(app, ["idea", "New one"])

    assert result.exit_code == 0, result.output
    stored = _ideas(data_dir)
    assert [i["content"] for i in stored] == ["New one", "Keep me", "Broken"]
    assert stored[-1] == bad
