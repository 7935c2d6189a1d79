"""Command line interface package."""

from tagmend.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
