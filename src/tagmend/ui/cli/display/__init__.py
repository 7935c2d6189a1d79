"""Display management for CLI interface."""

from tagmend.ui.cli.display.report import ConsoleReporter, format_summary_line

__all__ = ["ConsoleReporter", "format_summary_line"]
