"""Tests for the note commands."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from kirit.main import app


def _notes(data_dir: Path) -> list[dict]:
    return json.loads((data_dir / "notes.json").read_text(encoding="utf-8"))


def _seed(data_dir: Path, notes: list[dict]) -> None:
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "notes.json").write_text(json.dumps(notes, indent=2), encoding="utf-8")


class TestNote:
    def test_adds_note_with_tags(self, runner: CliRunner, data_dir: Path) -> None:
        result = runner.invoke(app, ["note", "Buy", "milk", "#Errands"])

        assert result.exit_code == 0, result.output
        assert "Note saved!" in result.output
        notes = _notes(data_dir)
        assert len(notes) == 1
        assert notes[0]["content"] == "Buy milk #Errands"
        assert notes[0]["tags"] == ["errands"]
        assert notes[0]["createdAt"].endswith("Z")

    def test_newest_first(self, runner: CliRunner, data_dir: Path) -> None:
        runner.invoke(app, ["note", "first"])
        runner.invoke(app, ["n", "second"])

        assert [n["content"] for n in _notes(data_dir)] == ["second", "first"]

    def test_ids_are_unique(self, runner: CliRunner, data_dir: Path) -> None:
        for i in range(5):
            runner.invoke(app, ["note", f"note {i}"])

        ids = [n["id"] for n in _notes(data_dir)]
        assert len(set(ids)) == 5

    def test_prompts_when_no_text(self, runner: CliRunner, data_dir: Path) -> None:
        result = runner.invoke(app, ["note"], input="from the prompt\n")

        assert result.exit_code == 0, result.output
        assert _notes(data_dir)[0]["content"] == "from the prompt"

    def test_empty_prompt_answer_fails(self, runner: CliRunner, data_dir: Path) -> None:
        result = runner.invoke(app, ["note"], input="   \n")

        assert result.exit_code == 1
        assert "Note cannot be empty" in result.output
        assert _notes(data_dir) == []

    def test_recovers_from_corrupt_file(self, runner: CliRunner, data_dir: Path) -> None:
        data_dir.mkdir(parents=True, exist_ok=True)
        (data_dir / "notes.json").write_text("{oops", encoding="utf-8")

        result = runner.invoke(app, ["note", "fresh start"])

        assert result.exit_code == 0, result.output
        assert [n["content"] for n in _notes(data_dir)] == ["fresh start"]


class TestListNotes:
    def test_empty(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["notes"])
        assert result.exit_code == 0
        assert "No notes found" in result.output

    def test_lists_with_positions_and_tags(self, runner: CliRunner, data_dir: Path) -> None:
        _seed(
            data_dir,
            [
                {"id": "aaaa1111bbbb", "content": "Standup #work", "tags": ["work"], "createdAt": ""},
                {"id": "cccc2222dddd", "content": "Groceries", "tags": [], "createdAt": ""},
            ],
        )

        result = runner.invoke(app, ["notes"])

        assert result.exit_code == 0, result.output
        assert "Your Notes (2)" in result.output
        assert "1. Standup #work [work]" in result.output
        assert "2. Groceries" in result.output
        assert "id: aaaa1111" in result.output

    def test_search_flag_both_cases(self, runner: CliRunner, data_dir: Path) -> None:
        _seed(
            data_dir,
            [
                {"id": "a1", "content": "Call the bank", "tags": [], "createdAt": ""},
                {"id": "b2", "content": "Groceries", "tags": [], "createdAt": ""},
            ],
        )

        lower = runner.invoke(app, ["notes", "--search", "BANK"])
        upper = runner.invoke(app, ["notes", "-S", "bank"])

        for result in (lower, upper):
            assert result.exit_code == 0, result.output
            assert "Call the bank" in result.output
            assert "Groceries" not in result.output

    def test_tag_filter_keeps_storage_positions(self, runner: CliRunner, data_dir: Path) -> None:
        _seed(
            data_dir,
            [
                {"id": "a1", "content": "plain", "tags": [], "createdAt": ""},
                {"id": "b2", "content": "tagged #Home", "tags": ["home"], "createdAt": ""},
            ],
        )

        result = runner.invoke(app, ["notes", "--TAG", "HOME"])

        assert result.exit_code == 0, result.output
        assert "2. tagged #Home" in result.output
        assert "plain" not in result.output

    def test_limit_reports_remainder(
        self, runner: CliRunner, data_dir: Path, monkeypatch
    ) -> None:
        monkeypatch.setenv("KIRIT_LIST_LIMIT", "2")
        _seed(
            data_dir,
            [{"id": f"id{i}", "content": f"note {i}", "tags": [], "createdAt": ""} for i in range(5)],
        )

        result = runner.invoke(app, ["notes"])

        assert "... and 3 more" in result.output
        assert "note 4" not in result.output


class TestRemoveNote:
    def test_by_position(self, runner: CliRunner, data_dir: Path) -> None:
        _seed(
            data_dir,
            [
                {"id": "a1", "content": "keep", "tags": [], "createdAt": ""},
                {"id": "b2", "content": "drop", "tags": [], "createdAt": ""},
            ],
        )

        result = runner.invoke(app, ["note-rm", "2"])

        assert result.exit_code == 0, result.output
        assert 'Removed note: "drop"' in result.output
        assert [n["id"] for n in _notes(data_dir)] == ["a1"]

    def test_by_id_prefix(self, runner: CliRunner, data_dir: Path) -> None:
        _seed(
            data_dir,
            [
                {"id": "lx9abc", "content": "keep", "tags": [], "createdAt": ""},
                {"id": "lz7def", "content": "drop", "tags": [], "createdAt": ""},
            ],
        )

        result = runner.invoke(app, ["nr", "lz7"])

        assert result.exit_code == 0, result.output
        assert [n["id"] for n in _notes(data_dir)] == ["lx9abc"]

    def test_not_found_leaves_file_untouched(self, runner: CliRunner, data_dir: Path) -> None:
        _seed(
            data_dir,
            [{"id": f"k{i}", "content": f"n{i}", "tags": [], "createdAt": ""} for i in range(3)],
        )
        before = (data_dir / "notes.json").read_bytes()

        result = runner.invoke(app, ["note-rm", "99"])

        assert result.exit_code == 1
        assert "Note not found" in result.output
        assert (data_dir / "notes.json").read_bytes() == before


def test_failed_save_exits_and_keeps_file(
    runner: CliRunner, data_dir: Path, monkeypatch
) -> None:
    import kirit.core.store as store_module

    _seed(data_dir, [{"id": "a1", "content": "existing", "tags": [], "createdAt": ""}])
    for name in ("todos.json", "ideas.json"):
        (data_dir / name).write_text("[]", encoding="utf-8")
    before = (data_dir / "notes.json").read_bytes()

    def no_space(src, dst):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(store_module.os, "replace", no_space)

    result = runner.invoke(app, ["note", "will not fit"])

    assert result.exit_code == 1
    assert "STORAGE_WRITE_ERROR" in result.output
    assert "Cannot write notes.json: No space left on device" in result.output
    assert (data_dir / "notes.json").read_bytes() == before
    assert not (data_dir / ".notes.json.tmp").exists()
