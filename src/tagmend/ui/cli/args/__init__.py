"""Command line argument handling package."""

from tagmend.ui.cli.args.parser import ArgumentParser
from tagmend.ui.cli.args.options import CLIArgs, RunArgs

__all__ = ["ArgumentParser", "CLIArgs", "RunArgs"]
