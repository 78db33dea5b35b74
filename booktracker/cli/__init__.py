"""Command line utilities for booktracker administration."""

from .admin_commands import build_parser, main

__all__ = ["build_parser", "main"]
