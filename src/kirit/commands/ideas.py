"""Idea and brainstorming commands."""

from __future__ import annotations

import typer
from rich.markup import escape
from rich.prompt import Prompt

from kirit.core import query
from kirit.core.console import console
from kirit.core.decorators import handle_exceptions
from kirit.core.models import Idea
from kirit.core.result import ValidationError
from kirit.ui import render

SORT_KEYS = ("new", "votes")


@handle_exceptions
def idea(
    ctx: typer.Context,
    content: list[str] | None = typer.Argument(None, help="Idea description."),
) -> None:
    """Capture a quick idea."""
    state = ctx.obj
    state.banner()

    text = " ".join(content or [])
    if not text:
        text = Prompt.ask("What's your idea? 💡", default="", show_default=False)

    new_idea = Idea.create(text)
    ideas = state.stores.ideas.load()
    ideas.insert(0, new_idea)
    state.stores.ideas.save(ideas)

    render.success("Idea captured! 💡")
    render.hint(render.quoted(query.truncate_for_display(new_idea.content, 50)))


@handle_exceptions
def list_ideas(
    ctx: typer.Context,
    sort: str = typer.Option("new", "--sort", "-s", "--SORT", "-S", help="Sort by: new, votes."),
) -> None:
    """List all ideas."""
    state = ctx.obj
    sort_by = sort.lower()
    if sort_by not in SORT_KEYS:
        raise ValidationError(f"Unknown sort key '{sort}'", context={"expected": ", ".join(SORT_KEYS)})

    state.banner()
    stored = state.stores.ideas.load()

    if not stored:
        render.info("No ideas captured yet")
        render.hint("Add one with: kirit idea <content>")
        return

    numbering = query.positions(stored)
    ideas = query.sort_by_votes_descending(stored) if sort_by == "votes" else stored

    console.print("\n[bold]💡 Your Ideas:[/bold]\n")

    for item in ideas:
        position = numbering[item.id]
        console.print(f"[cyan]{position}.[/cyan] {render.status_icon(item.status)} {escape(item.content)}")
        render.hint(
            f" [yellow]▲ {item.votes}[/yellow] • {render.format_relative(item.created_at)}"
            f" • kirit upvote {position}"
        )


@handle_exceptions
def upvote(
    ctx: typer.Context,
    target: str = typer.Argument(..., metavar="INDEX", help="Idea position."),
) -> None:
    """Upvote an idea."""
    state = ctx.obj
    ideas = state.stores.ideas.load()

    item = ideas[query.resolve_position(ideas, target, kind="Idea").unwrap()]
    votes = item.upvote()
    state.stores.ideas.save(ideas)

    render.success(f"Upvoted! (votes: {votes})")


@handle_exceptions
def remove_idea(
    ctx: typer.Context,
    target: str = typer.Argument(..., metavar="INDEX", help="Idea position."),
) -> None:
    """Remove an idea."""
    state = ctx.obj
    ideas = state.stores.ideas.load()

    removed = ideas.pop(query.resolve_position(ideas, target, kind="Idea").unwrap())
    state.stores.ideas.save(ideas)

    render.success(f"Removed idea: {render.quoted(query.truncate_for_display(removed.content, 40))}")
