"""Command execution package for CLI."""

from tagmend.ui.cli.commands.executor import CommandExecutor
from tagmend.ui.cli.commands.batch import BatchCommand

__all__ = ["BatchCommand", "CommandExecutor"]
