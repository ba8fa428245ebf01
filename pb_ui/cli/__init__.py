"""Typer CLI entry points."""

from pb_ui.cli.main import app, main

__all__ = ["app", "main"]
