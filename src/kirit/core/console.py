"""Rich consoles and the kirit logger.

Command output goes to ``console``; errors and log records go to
``stderr_console`` so piping ``kirit notes`` never mixes in diagnostics.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "kirit"

console = Console()
stderr_console = Console(stderr=True)


def setup_logging(level: str = "INFO", verbose: bool = False) -> logging.Logger:
    """Route the ``kirit`` logger tree to stderr through Rich.

    ``verbose`` forces DEBUG, which surfaces store fallbacks, held records,
    id-prefix resolution and every save. Safe to call once per invocation;
    earlier handlers are replaced.
    """
    numeric_level = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = RichHandler(console=stderr_console, markup=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    # module loggers (kirit.core.store, ...) reach the handler through this one
    logger.propagate = False
    return logger
