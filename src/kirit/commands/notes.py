"""Quick note commands.

Provides CLI commands for:
    - Adding a note (tags are picked up from #hashtags in the text)
    - Listing notes, optionally filtered by text or tag
    - Removing a note by position or id prefix
"""

from __future__ import annotations

import typer
from rich.markup import escape
from rich.prompt import Prompt

from kirit.core import query
from kirit.core.console import console
from kirit.core.decorators import handle_exceptions
from kirit.core.models import Note
from kirit.ui import render


@handle_exceptions
def note(
    ctx: typer.Context,
    content: list[str] | None = typer.Argument(None, help="Note content."),
) -> None:
    """Add a quick note."""
    state = ctx.obj
    state.banner()

    text = " ".join(content or [])
    if not text:
        text = Prompt.ask("Enter your note", default="", show_default=False)

    new_note = Note.create(text)
    notes = state.stores.notes.load()
    notes.insert(0, new_note)
    state.stores.notes.save(notes)

    render.success("Note saved!")
    render.hint(render.quoted(query.truncate_for_display(new_note.content, 50)))
    render.hint('Use "kirit notes" to view all notes')


@handle_exceptions
def list_notes(
    ctx: typer.Context,
    search: str | None = typer.Option(
        None, "--search", "-s", "--SEARCH", "-S", help="Only notes containing this text."
    ),
    tag: str | None = typer.Option(
        None, "--tag", "-t", "--TAG", "-T", help="Only notes carrying this tag."
    ),
) -> None:
    """List all notes."""
    state = ctx.obj
    state.banner()

    stored = state.stores.notes.load()
    numbering = query.positions(stored)

    notes = stored
    if search:
        notes = query.filter_by_text(notes, search)
    if tag:
        notes = query.filter_by_tag(notes, tag)

    if not notes:
        render.info("No notes found")
        render.hint("Add one with: kirit note <content>")
        return

    limit = state.config.list_limit
    width = state.config.truncate_width
    console.print(f"\n[bold]📝 Your Notes ({len(notes)}):[/bold]\n")

    for item in notes[:limit]:
        tags = f" [cyan]\\[{escape(', '.join(item.tags))}][/cyan]" if item.tags else ""
        console.print(
            f"[yellow]{numbering[item.id]}.[/yellow] "
            f"{escape(query.truncate_for_display(item.content, width))}{tags}"
        )
        render.hint(f" {render.format_relative(item.created_at)} • id: {render.short_id(item.id)}")

    if len(notes) > limit:
        console.print(f"\n[dim]... and {len(notes) - limit} more[/dim]")


@handle_exceptions
def remove_note(
    ctx: typer.Context,
    target: str = typer.Argument(..., metavar="ID", help="Note position or id prefix."),
) -> None:
    """Remove a note by position or id prefix."""
    state = ctx.obj
    notes = state.stores.notes.load()

    index = query.resolve_position(notes, target, kind="Note").unwrap()
    removed = notes.pop(index)
    state.stores.notes.save(notes)

    render.success(f"Removed note: {render.quoted(query.truncate_for_display(removed.content, 40))}")
