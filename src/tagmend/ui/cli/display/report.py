"""Console rendering of batch outcomes and statistics."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from tagmend.features.normalization import (
    ChangeKind,
    CommandMode,
    FileOutcome,
    Statistics,
)
from tagmend.shared.media_record import MediaRecord

_KIND_STYLES: dict[ChangeKind, str] = {
    ChangeKind.ENCODING_FIXED: "yellow",
    ChangeKind.CLEANED: "cyan",
    ChangeKind.ZERO_PADDED: "blue",
    ChangeKind.FALLBACK_FILLED: "magenta",
}


def _quoted(value: str) -> str:
    return f'"{escape(value)}"'


def format_summary_line(record: MediaRecord) -> str:
    """Return the ``Title: "…", Artist: "…", Album: "…"`` fragment for ``record``."""

    return ", ".join(
        f"{tag_field.value.capitalize()}: {_quoted(value)}"
        for tag_field, value in record.text_fields().items()
    )


@final
class ConsoleReporter:
    """BatchReporter printing one entry per file and a final statistics block."""

    def __init__(
        self,
        mode: CommandMode,
        total: int,
        *,
        console: Console | None = None,
        quiet: bool = False,
    ) -> None:
        self.mode: CommandMode = mode
        self.total: int = total
        self.console: Console = console or Console()
        self.quiet: bool = quiet

    def _prefix(self, outcome: FileOutcome) -> str:
        return f"[{outcome.dispatch_index}/{self.total}]"

    def show_header(self, directory: str) -> None:
        """Print the run banner before any job completes."""

        if self.quiet:
            return
        if self.mode is CommandMode.TEST:
            self.console.print("[bold yellow]Preview Mode - No changes will be made[/bold yellow]")
        self.console.print(f"Scanning directory: {escape(directory)}")
        self.console.print(f"Found {self.total} audio files\n")

    def report_file(self, outcome: FileOutcome) -> None:
        name = escape(str(outcome.scanned.relative_path))
        prefix = escape(self._prefix(outcome))
        if not outcome.success:
            self.console.print(f"[red]{prefix} Error: {name}: {escape(outcome.error_message or '')}[/red]")
            return
        if self.quiet:
            return

        match self.mode:
            case CommandMode.SCAN:
                self._render_scan(prefix, name, outcome)
            case CommandMode.TEST:
                self._render_preview(prefix, name, outcome)
            case _:
                record = outcome.final_record
                summary = format_summary_line(record) if record is not None else ""
                self.console.print(f"{prefix} Processing: {name} → {summary}")
                if outcome.result is not None:
                    for event in outcome.result.events:
                        self.console.print(f"    [dim]{escape(event.describe())}[/dim]")

    def _render_scan(self, prefix: str, name: str, outcome: FileOutcome) -> None:
        record = outcome.record
        self.console.print(f"[bold]{prefix} {name}[/bold]")
        if record is None:
            return
        self.console.print(f"  Title:  {_quoted(record.title)}")
        self.console.print(f"  Artist: {_quoted(record.artist)}")
        self.console.print(f"  Album:  {_quoted(record.album)}")
        self.console.print(f"  Year:   {record.year or '-'}")
        self.console.print(f"  Genre:  {_quoted(record.genre)}")

    def _render_preview(self, prefix: str, name: str, outcome: FileOutcome) -> None:
        self.console.print(f"[bold]{prefix} {name}[/bold]")
        result = outcome.result
        if result is None or not result.changed:
            self.console.print("  [dim]no changes[/dim]")
            return
        for event in result.events:
            style = _KIND_STYLES[event.kind]
            detail = f", {escape(event.detail)}" if event.detail else ""
            self.console.print(
                f"  {event.field.value}: {_quoted(event.old_value)} → {_quoted(event.new_value)} "
                f"[{style}]({event.kind.value}{detail})[/{style}]"
            )

    def report_statistics(self, statistics: Statistics) -> None:
        if self.quiet:
            return
        self.console.print("\n[bold]Statistics:[/bold]")
        self.console.print(f"  Total files: {statistics.total}")
        self.console.print(f"  [green]Successful: {statistics.success}[/green]")
        if statistics.failed:
            self.console.print(f"  [red]Failed: {statistics.failed}[/red]")
        else:
            self.console.print(f"  Failed: {statistics.failed}")
        if self.mode.writes:
            self.console.print(f"  Encoding fixed: {statistics.encoding_fixed}")
            self.console.print(f"  Tags updated: {statistics.tags_updated}")
            self.console.print(f"  Auto albums: {statistics.auto_albums}")
            self.console.print(f"  Auto titles: {statistics.auto_titles}")


__all__ = ["ConsoleReporter", "format_summary_line"]
