from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter

import typer
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .core.config import AppConfig, ConfigLoadResult, load_config
from .core.console import console, setup_logging
from .core.decorators import handle_exceptions
from .core.registry import discover_commands
from .core.store import StoragePaths, Stores, init_storage
from .ui import render

app = typer.Typer(
    help="kirit: a CLI for quick notes, todos, and brainstorming.",
    invoke_without_command=True,
)
logger = logging.getLogger(__name__)


@dataclass
class AppState:
    config: AppConfig
    config_meta: ConfigLoadResult
    logger: logging.Logger
    paths: StoragePaths
    stores: Stores

    def banner(self) -> None:
        if self.config.show_banner:
            render.banner()


@app.callback()
@handle_exceptions
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to a kirit config file (TOML or JSON)."
    ),
    data_dir: Path | None = typer.Option(
        None, "--data-dir", help="Override the directory holding the JSON collections."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    # load_config never raises; problems come back in meta.error
    loaded_config, meta = load_config(config_path=config)
    if data_dir is not None:
        loaded_config = loaded_config.model_copy(update={"data_dir": data_dir.expanduser()})

    logger = setup_logging(level=loaded_config.log_level, verbose=verbose)

    paths = loaded_config.storage_paths()
    init_storage(paths)

    state = AppState(
        config=loaded_config,
        config_meta=meta,
        logger=logger,
        paths=paths,
        stores=Stores.open(paths),
    )
    ctx.obj = state

    if meta.error:
        # Display "Safe Mode" Warning
        console.print(
            Panel(
                f"[bold red]Configuration Error - Safe Mode Active[/bold red]\n\n"
                f"Failed to load {meta.path}:\n{escape(meta.error)}\n\n"
                f"[yellow]Using default settings.[/yellow]",
                border_style="red",
            )
        )
    else:
        logger.debug(
            "Loaded configuration from %s (env overrides: %s, data dir: %s)",
            meta.path,
            sorted(meta.env_overrides),
            paths.data_dir,
        )

    if ctx.invoked_subcommand is None:
        state.banner()
        console.print(ctx.get_help(), markup=False, highlight=False)
        console.print(f"\n[dim]All data is stored in:[/dim] {paths.data_dir}")
        raise typer.Exit()


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Show the active configuration and where it came from."""
    state: AppState = ctx.obj
    config = state.config
    meta = state.config_meta

    table = Table(title="Config", box=box.SIMPLE, expand=True)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    for key, value in config.model_dump().items():
        table.add_row(key, str(value))

    console.print(table)

    meta_lines = [
        f"Path: {meta.path}",
        "File loaded: yes" if meta.file_loaded else "File loaded: no (using defaults + env)",
    ]

    if meta.env_overrides:
        meta_lines.append("Env overrides: " + ", ".join(sorted(meta.env_overrides)))

    console.print(Panel("\n".join(meta_lines), title="Config source", box=box.SIMPLE))


@app.command("version")
def show_version() -> None:
    """Print the kirit version."""
    console.print(__version__)


_registered = False


def _register_commands() -> None:
    global _registered
    if _registered:
        return
    commands_path = Path(__file__).resolve().parent / "commands"
    for spec in discover_commands(commands_path):
        app.command(spec.name, hidden=spec.hidden)(spec.handler)
    _registered = True


def _register_commands_with_timing() -> None:
    start = perf_counter()
    _register_commands()
    elapsed = perf_counter() - start
    logger.debug("Command registry initialized in %.3f seconds", elapsed)


_register_commands_with_timing()


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
