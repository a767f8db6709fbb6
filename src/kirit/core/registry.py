from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass
class CommandSpec:
    name: str
    handler: Callable[..., None]
    hidden: bool = False


# module -> {command name: handler attribute}. Aliases point at the same
# handler and are hidden from the help listing.
_FUNCTION_COMMANDS: dict[str, dict[str, str]] = {
    "notes": {"note": "note", "notes": "list_notes", "note-rm": "remove_note"},
    "todos": {
        "todo": "todo",
        "todos": "list_todos",
        "done": "done",
        "undo": "undo",
        "todo-rm": "remove_todo",
    },
    "ideas": {
        "idea": "idea",
        "ideas": "list_ideas",
        "upvote": "upvote",
        "idea-rm": "remove_idea",
    },
    "utility": {"search": "search", "stats": "stats", "clear": "clear"},
}

_ALIASES: dict[str, str] = {
    "n": "note",
    "nr": "note-rm",
    "td": "todo",
    "tr": "todo-rm",
    "i": "idea",
    "up": "upvote",
    "ir": "idea-rm",
    "s": "search",
}


def _import_module(module_name: str) -> object | None:
    try:
        return importlib.import_module(module_name)
    except ImportError as exc:  # pragma: no cover - broken install
        logger.error("Failed to import command module %s: %s", module_name, exc)
        return None


def _build_function_commands(module_name: str, module: object) -> list[CommandSpec]:
    specs: list[CommandSpec] = []
    mapping = _FUNCTION_COMMANDS.get(module_name, {})
    for cmd_name, attr in mapping.items():
        handler = getattr(module, attr, None)
        if not callable(handler):  # pragma: no cover - registry typo
            logger.error("Command %s.%s not found or not callable", module_name, attr)
            continue
        specs.append(CommandSpec(name=cmd_name, handler=handler))
        for alias, target in _ALIASES.items():
            if target == cmd_name:
                specs.append(CommandSpec(name=alias, handler=handler, hidden=True))
    return specs


def discover_commands(package_path: Path, package: str = "kirit.commands") -> list[CommandSpec]:
    """
    Discover command callables in the command modules under ``package_path``.

    Returns:
        Command specs, including hidden alias entries.
    """
    function_commands: list[CommandSpec] = []

    for file in sorted(package_path.glob("*.py")):
        if file.name.startswith("_"):
            continue
        module_name = file.stem
        if module_name not in _FUNCTION_COMMANDS:
            continue
        module = _import_module(f"{package}.{module_name}")
        if module is None:
            continue
        function_commands.extend(_build_function_commands(module_name, module))

    return function_commands
