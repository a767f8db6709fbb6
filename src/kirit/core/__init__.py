"""Core storage, query and configuration layer for kirit."""
