"""Record models for the three kirit collections.

Each record mirrors one object in its JSON file. Field names are snake_case
in Python and camelCase on disk (``createdAt``, ``completedAt``).
Unknown keys are kept so a hand-edited file survives a later save.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from kirit.core.ids import generate_id
from kirit.core.query import extract_tags
from kirit.core.result import ValidationError


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IdeaStatus(str, Enum):
    NEW = "new"
    WIP = "wip"
    DONE = "done"
    ARCHIVED = "archived"


def utc_timestamp(now: dt.datetime | None = None) -> str:
    """Format a timestamp as ISO-8601 UTC with millisecond precision and a Z suffix."""
    moment = (now or dt.datetime.now(dt.timezone.utc)).astimezone(dt.timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _require_text(value: str, kind: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{kind} cannot be empty")
    return text


def parse_priority(value: str | None, *, strict: bool = True) -> str:
    """Normalize a priority flag value.

    Values are lowercased. With ``strict`` an unknown value is rejected;
    otherwise it is stored verbatim and rendered with the fallback icon.
    """
    if value is None or not value.strip():
        return Priority.MEDIUM.value
    normalized = value.strip().lower()
    if strict and normalized not in {p.value for p in Priority}:
        choices = ", ".join(p.value for p in Priority)
        raise ValidationError(
            f"Unknown priority '{value}'", context={"expected": choices}
        )
    return normalized


class Record(BaseModel):
    """Fields shared by every stored record."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    text_field: ClassVar[str] = "content"

    @property
    def text(self) -> str:
        """The record's primary text, used for search and display."""
        return str(getattr(self, self.text_field))

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Note(Record):
    id: str
    content: str
    tags: list[str] = Field(default_factory=list)
    created_at: str = Field(default="", alias="createdAt")

    @classmethod
    def create(cls, content: str, *, now: dt.datetime | None = None) -> Note:
        text = _require_text(content, "Note")
        return cls(
            id=generate_id(),
            content=text,
            tags=extract_tags(text),
            created_at=utc_timestamp(now),
        )


class Todo(Record):
    text_field: ClassVar[str] = "task"

    id: str
    task: str
    priority: str = Priority.MEDIUM.value
    done: bool = False
    created_at: str = Field(default="", alias="createdAt")
    completed_at: str | None = Field(default=None, alias="completedAt")

    @classmethod
    def create(
        cls,
        task: str,
        priority: str | None = None,
        *,
        strict: bool = True,
        now: dt.datetime | None = None,
    ) -> Todo:
        text = _require_text(task, "Task")
        return cls(
            id=generate_id(),
            task=text,
            priority=parse_priority(priority, strict=strict),
            done=False,
            created_at=utc_timestamp(now),
        )

    def mark_done(self, now: dt.datetime | None = None) -> None:
        self.done = True
        self.completed_at = utc_timestamp(now)

    def reopen(self) -> None:
        self.done = False
        self.completed_at = None


class Idea(Record):
    id: str
    content: str
    votes: int = Field(default=0, ge=0)
    status: str = IdeaStatus.NEW.value
    created_at: str = Field(default="", alias="createdAt")

    @classmethod
    def create(cls, content: str, *, now: dt.datetime | None = None) -> Idea:
        text = _require_text(content, "Idea")
        return cls(
            id=generate_id(),
            content=text,
            votes=0,
            status=IdeaStatus.NEW.value,
            created_at=utc_timestamp(now),
        )

    def upvote(self) -> int:
        self.votes += 1
        return self.votes


__all__ = [
    "Idea",
    "IdeaStatus",
    "Note",
    "Priority",
    "Record",
    "Todo",
    "parse_priority",
    "utc_timestamp",
]
