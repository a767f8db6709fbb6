"""kirit - quick notes, todos, and ideas from the command line.

This package provides the `kirit` command-line tool: capture notes, todos
and ideas, stored as JSON files in a per-user data directory.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.0"
