"""Todo commands.

Positions printed by `kirit todos` are positions in the stored list, so
`kirit done 3` hits the same todo whether or not completed ones are shown.
"""

from __future__ import annotations

import typer
from rich.markup import escape
from rich.prompt import Prompt

from kirit.core import query
from kirit.core.console import console
from kirit.core.decorators import handle_exceptions
from kirit.core.models import Todo
from kirit.ui import render


@handle_exceptions
def todo(
    ctx: typer.Context,
    task: list[str] | None = typer.Argument(None, help="Task description."),
    priority: str | None = typer.Option(
        None, "--priority", "-p", "--Priority", "-P", help="Priority: high, medium, low."
    ),
) -> None:
    """Add a todo item."""
    state = ctx.obj
    state.banner()

    text = " ".join(task or [])
    if not text:
        text = Prompt.ask("What needs to be done?", default="", show_default=False)

    new_todo = Todo.create(text, priority, strict=state.config.strict_enums)
    todos = state.stores.todos.load()
    todos.insert(0, new_todo)
    state.stores.todos.save(todos)

    render.success(f"Todo added! \\[{escape(new_todo.priority.upper())}]")
    render.hint(render.quoted(query.truncate_for_display(new_todo.task, 50)))


@handle_exceptions
def list_todos(
    ctx: typer.Context,
    show_all: bool = typer.Option(
        False, "--all", "-a", "--ALL", "-A", help="Show completed todos too."
    ),
) -> None:
    """List pending todos (or all of them)."""
    state = ctx.obj
    state.banner()

    stored = state.stores.todos.load()
    numbering = query.positions(stored)
    todos = stored if show_all else query.filter_undone(stored)

    if not todos:
        render.success("No pending todos! 🎉")
        render.hint("Add one with: kirit todo <task>")
        return

    console.print("\n[bold]☑️  Your Todos:[/bold]\n")

    for item in todos:
        status = "[green]\\[✓][/green]" if item.done else "[yellow]\\[ ][/yellow]"
        text = f"[strike]{escape(item.task)}[/strike]" if item.done else escape(item.task)
        console.print(f"{status} {render.priority_icon(item.priority)} {text}")
        render.hint(
            f" {render.format_relative(item.created_at)} • kirit done {numbering[item.id]}"
        )


@handle_exceptions
def done(
    ctx: typer.Context,
    target: str = typer.Argument(..., metavar="INDEX", help="Todo position."),
) -> None:
    """Mark a todo as complete."""
    state = ctx.obj
    todos = state.stores.todos.load()

    item = todos[query.resolve_position(todos, target, kind="Todo").unwrap()]
    item.mark_done()
    state.stores.todos.save(todos)

    render.success(f"Completed: {render.quoted(query.truncate_for_display(item.task, 40))}")


@handle_exceptions
def undo(
    ctx: typer.Context,
    target: str = typer.Argument(..., metavar="INDEX", help="Todo position."),
) -> None:
    """Mark a todo as incomplete."""
    state = ctx.obj
    todos = state.stores.todos.load()

    item = todos[query.resolve_position(todos, target, kind="Todo").unwrap()]
    item.reopen()
    state.stores.todos.save(todos)

    render.info(f"Reopened: {render.quoted(query.truncate_for_display(item.task, 40))}")


@handle_exceptions
def remove_todo(
    ctx: typer.Context,
    target: str = typer.Argument(..., metavar="INDEX", help="Todo position."),
) -> None:
    """Remove a todo."""
    state = ctx.obj
    todos = state.stores.todos.load()

    removed = todos.pop(query.resolve_position(todos, target, kind="Todo").unwrap())
    state.stores.todos.save(todos)

    render.success(f"Removed: {render.quoted(query.truncate_for_display(removed.task, 40))}")
