"""Cross-collection commands: search, stats and clear."""

from __future__ import annotations

import typer
from rich import box
from rich.prompt import Confirm
from rich.table import Table

from kirit.core import query
from kirit.core.console import console
from kirit.core.decorators import handle_exceptions
from kirit.ui import render


@handle_exceptions
def search(
    ctx: typer.Context,
    text: str = typer.Argument(..., metavar="QUERY", help="Search query."),
) -> None:
    """Search across notes, todos, and ideas."""
    state = ctx.obj
    state.banner()
    stores = state.stores
    width = state.config.truncate_width

    results = query.search_all(
        stores.notes.load(), stores.todos.load(), stores.ideas.load(), text
    )

    console.print(f"\n[bold]🔍 Search results for {render.quoted(text)}:[/bold]\n")

    if results.notes:
        console.print("[cyan]Notes:[/cyan]")
        for item in results.notes:
            console.print(f"  • {render.quoted(query.truncate_for_display(item.content, width))}")
        console.print()

    if results.todos:
        console.print("[cyan]Todos:[/cyan]")
        for item in results.todos:
            status = "✓" if item.done else "○"
            console.print(f"  {status} {render.quoted(query.truncate_for_display(item.task, width))}")
        console.print()

    if results.ideas:
        console.print("[cyan]Ideas:[/cyan]")
        for item in results.ideas:
            console.print(f"  💡 {render.quoted(query.truncate_for_display(item.content, width))}")
        console.print()

    if results.total == 0:
        render.info("No results found")
    else:
        render.success(f"Found {results.total} result(s)")


@handle_exceptions
def stats(ctx: typer.Context) -> None:
    """Show your productivity stats."""
    state = ctx.obj
    state.banner()
    notes = state.stores.notes.load()
    todos = state.stores.todos.load()
    ideas = state.stores.ideas.load()

    summary = query.summarize(notes, todos, ideas)

    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("Category", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("📝 Notes", f"[cyan]{summary.notes}[/cyan]")
    table.add_row("☑️  Todos (pending)", f"[yellow]{summary.pending_todos}[/yellow]")
    table.add_row("☑️  Todos (done)", f"[green]{summary.completed_todos}[/green]")
    table.add_row("💡 Ideas", f"[magenta]{summary.ideas}[/magenta]")
    table.add_row("🔺 Total Upvotes", f"[yellow]{summary.total_votes}[/yellow]")
    console.print(table)

    console.print("[bold]📅 Recent Activity:[/bold]")
    recent_notes, recent_todos = query.recent_activity(notes, todos)
    if not recent_notes and not recent_todos:
        render.hint("No recent activity")
        return

    for note in recent_notes:
        render.hint(
            f"{render.format_relative(note.created_at)} - Note: "
            f"{render.quoted(query.truncate_for_display(note.content, 35))}"
        )
    for todo in recent_todos:
        render.hint(
            f"{render.format_relative(todo.created_at)} - Todo: "
            f"{render.quoted(query.truncate_for_display(todo.task, 35))}"
        )


@handle_exceptions
def clear(
    ctx: typer.Context,
    todos: bool = typer.Option(
        False, "--todos", "-t", "--TODOS", "-T", help="Clear completed todos."
    ),
    everything: bool = typer.Option(
        False, "--all", "-a", "--ALL", "-A", help="Clear ALL data (destructive)."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation for --all."),
) -> None:
    """Clear completed todos or all data."""
    state = ctx.obj
    state.banner()
    stores = state.stores

    if everything:
        confirmed = yes or Confirm.ask(
            "Delete ALL notes, todos, and ideas? This cannot be undone!", default=False
        )
        if not confirmed:
            render.info("Cancelled")
            return
        stores.notes.clear()
        stores.todos.clear()
        stores.ideas.clear()
        state.logger.debug("Cleared all collections in %s", state.paths.data_dir)
        render.success("All data cleared")
        return

    if todos:
        stored = stores.todos.load()
        remaining = query.filter_undone(stored)
        stores.todos.save(remaining)
        render.success(f"Cleared {len(stored) - len(remaining)} completed todo(s)")
        return

    render.info("Use --todos to clear completed todos, or --all to clear everything")
