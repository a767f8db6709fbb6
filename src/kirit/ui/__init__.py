"""Rich rendering helpers for kirit commands."""
