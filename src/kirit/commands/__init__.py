"""CLI command modules for kirit.

This package contains all user-facing CLI commands organized by collection:
    - notes: Add, list and remove notes
    - todos: Add, list, complete, reopen and remove todos
    - ideas: Capture, list, upvote and remove ideas
    - utility: Cross-collection search, stats and clearing
"""

from __future__ import annotations
