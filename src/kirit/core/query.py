"""Filtering, sorting and lookup over loaded collections.

Every function here is pure: it takes records already loaded by a
RecordStore and returns new lists or values without touching disk.
String matching is case-insensitive substring containment unless noted.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from kirit.core.result import Err, KiritError, NotFoundError, Ok, Result, ValidationError

if TYPE_CHECKING:
    from kirit.core.models import Idea, Note, Record, Todo

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="Record")

TAG_PATTERN = re.compile(r"#(\w+)", re.ASCII)
ELLIPSIS = "..."


def extract_tags(text: str) -> list[str]:
    """Return lowercased ``#tag`` bodies in first-occurrence order, without duplicates."""
    seen: dict[str, None] = {}
    for match in TAG_PATTERN.finditer(text):
        seen.setdefault(match.group(1).lower(), None)
    return list(seen)


def truncate_for_display(text: str, max_len: int) -> str:
    if len(text) > max_len:
        return text[: max(max_len - len(ELLIPSIS), 0)] + ELLIPSIS
    return text


def filter_by_text(records: Sequence[R], query: str) -> list[R]:
    needle = query.lower()
    return [record for record in records if needle in record.text.lower()]


def filter_by_tag(notes: Sequence[Note], tag: str) -> list[Note]:
    wanted = tag.lower()
    return [note for note in notes if wanted in note.tags]


def filter_undone(todos: Sequence[Todo]) -> list[Todo]:
    return [todo for todo in todos if not todo.done]


def sort_by_votes_descending(ideas: Sequence[Idea]) -> list[Idea]:
    # sorted() is stable, so equal vote counts keep insertion order.
    return sorted(ideas, key=lambda idea: idea.votes, reverse=True)


def positions(records: Sequence[Record]) -> dict[str, int]:
    """Map record id to its 1-based position in the stored collection.

    Listings that filter or sort use this so the numbers they print are the
    ones ``resolve_position`` accepts.
    """
    return {record.id: index for index, record in enumerate(records, start=1)}


def _parse_position(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def resolve_position(
    records: Sequence[Record], token: str, *, kind: str = "Record"
) -> Result[int, KiritError]:
    """
    Resolve a user-supplied position or id prefix to a 0-based index.

    The token is first read as a 1-based position. If it is not an integer,
    or is out of range, it is matched as a prefix of record ids; the prefix
    must identify exactly one record.
    """
    token = token.strip()
    if not token:
        return Err(ValidationError("Expected a position or id"))

    position = _parse_position(token)
    if position is not None and 1 <= position <= len(records):
        return Ok(position - 1)

    matches = [index for index, record in enumerate(records) if record.id.startswith(token)]
    if len(matches) == 1:
        logger.debug("Resolved id prefix %s to position %d", token, matches[0] + 1)
        return Ok(matches[0])
    if len(matches) > 1:
        return Err(
            ValidationError(
                f"Id prefix '{token}' is ambiguous", context={"matches": len(matches)}
            )
        )
    return Err(
        NotFoundError(f"{kind} not found", context={"target": token, "size": len(records)})
    )


# ---------------------------------------------------------------------------
# Cross-collection summaries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CollectionStats:
    notes: int
    pending_todos: int
    completed_todos: int
    ideas: int
    total_votes: int


@dataclass
class SearchResults:
    query: str
    notes: list[Note] = field(default_factory=list)
    todos: list[Todo] = field(default_factory=list)
    ideas: list[Idea] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.notes) + len(self.todos) + len(self.ideas)


def summarize(
    notes: Sequence[Note], todos: Sequence[Todo], ideas: Sequence[Idea]
) -> CollectionStats:
    completed = sum(1 for todo in todos if todo.done)
    return CollectionStats(
        notes=len(notes),
        pending_todos=len(todos) - completed,
        completed_todos=completed,
        ideas=len(ideas),
        total_votes=sum(idea.votes for idea in ideas),
    )


def recent_activity(
    notes: Sequence[Note], todos: Sequence[Todo], limit: int = 3
) -> tuple[list[Note], list[Todo]]:
    """Newest notes and todos, relying on the newest-first storage order."""
    return list(notes[:limit]), list(todos[:limit])


def search_all(
    notes: Sequence[Note], todos: Sequence[Todo], ideas: Sequence[Idea], query: str
) -> SearchResults:
    return SearchResults(
        query=query,
        notes=filter_by_text(notes, query),
        todos=filter_by_text(todos, query),
        ideas=filter_by_text(ideas, query),
    )


__all__ = [
    "CollectionStats",
    "SearchResults",
    "extract_tags",
    "filter_by_tag",
    "filter_by_text",
    "filter_undone",
    "positions",
    "recent_activity",
    "resolve_position",
    "search_all",
    "sort_by_votes_descending",
    "summarize",
    "truncate_for_display",
]
