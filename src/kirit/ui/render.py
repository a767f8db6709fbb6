"""Rich rendering helpers shared by the kirit commands.

Keeps the visual vocabulary in one place: the banner, status lines,
relative dates and the icons for priorities and idea statuses.
"""

from __future__ import annotations

import datetime as dt

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from kirit import __version__
from kirit.core.console import console

PRIORITY_ICONS = {"high": "🔴", "medium": "🟡", "low": "🟢"}
PRIORITY_FALLBACK = "⚪"

STATUS_ICONS = {"new": "✨", "wip": "🔨", "done": "✅", "archived": "📦"}
STATUS_FALLBACK = "○"

SHORT_ID_LENGTH = 8


def banner() -> None:
    title = Text("K I R I T", style="bold cyan", justify="center")
    subtitle = f"[dim]Quick notes • Todos • Ideas • v{__version__}[/dim]"
    console.print(Panel(title, subtitle=subtitle, box=box.ROUNDED, expand=False, padding=(0, 4)))


def success(message: str) -> None:
    console.print(f"[bright_green]✔[/bright_green] {message}")


def info(message: str) -> None:
    console.print(f"[bright_blue]ℹ[/bright_blue] {message}")


def hint(message: str) -> None:
    console.print(f"[dim]  {message}[/dim]")


def quoted(text: str) -> str:
    return f'"{escape(text)}"'


def priority_icon(priority: str) -> str:
    return PRIORITY_ICONS.get(priority, PRIORITY_FALLBACK)


def status_icon(status: str) -> str:
    return STATUS_ICONS.get(status, STATUS_FALLBACK)


def short_id(record_id: str) -> str:
    return record_id[:SHORT_ID_LENGTH]


def format_relative(timestamp: str, now: dt.datetime | None = None) -> str:
    """Render an ISO-8601 timestamp as "just now", "5m ago", "3h ago", "2d ago" or a date."""
    try:
        moment = dt.datetime.fromisoformat(timestamp)
    except ValueError:
        return timestamp or "unknown"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)

    current = now or dt.datetime.now(dt.timezone.utc)
    elapsed = current - moment
    minutes = int(elapsed.total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return moment.astimezone().date().isoformat()


__all__ = [
    "banner",
    "format_relative",
    "hint",
    "info",
    "priority_icon",
    "quoted",
    "short_id",
    "status_icon",
    "success",
]
