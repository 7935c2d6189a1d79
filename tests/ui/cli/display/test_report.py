"""Tests for console rendering of batch outcomes."""

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from tagmend.features.normalization import (
    ChangeEvent,
    ChangeKind,
    CommandMode,
    FileOutcome,
    NormalizationResult,
    ScannedFile,
    Statistics,
)
from tagmend.shared.media_record import MediaRecord, TagField
from tagmend.ui.cli.display.report import ConsoleReporter, format_summary_line


@pytest.fixture
def buffer() -> StringIO:
    return StringIO()


def _console(buffer: StringIO) -> Console:
    return Console(file=buffer, width=200, force_terminal=False, color_system=None)


def _record(**fields: object) -> MediaRecord:
    path = Path("/music/Album/01 song.mp3")
    return MediaRecord(path=path, relative_path=Path("Album/01 song.mp3")).with_fields(**fields)


def _outcome(
    mode: CommandMode,
    *,
    index: int = 1,
    success: bool = True,
    record: MediaRecord | None = None,
    result: NormalizationResult | None = None,
    error_message: str | None = None,
) -> FileOutcome:
    return FileOutcome(
        scanned=ScannedFile(Path("/music/Album/01 song.mp3"), Path("Album/01 song.mp3")),
        mode=mode,
        dispatch_index=index,
        success=success,
        record=record,
        result=result,
        error_message=error_message,
    )


def test_format_summary_line() -> None:
    record = _record(title="01 Song", artist="Band", album="Record")

    assert format_summary_line(record) == 'Title: "01 Song", Artist: "Band", Album: "Record"'


def test_header_in_preview_mode(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.TEST, 3, console=_console(buffer))

    reporter.show_header("/music")

    output = buffer.getvalue()
    assert "Preview Mode - No changes will be made" in output
    assert "Scanning directory: /music" in output
    assert "Found 3 audio files" in output


def test_header_without_preview_banner(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.FIX, 1, console=_console(buffer))

    reporter.show_header("/music")

    assert "Preview Mode" not in buffer.getvalue()


def test_scan_block_lists_fields(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.SCAN, 2, console=_console(buffer))
    record = _record(title="Song", artist="Band", album="Record", year=1999, genre="Rock")

    reporter.report_file(_outcome(CommandMode.SCAN, record=record))

    output = buffer.getvalue()
    assert "[1/2] Album/01 song.mp3" in output
    assert 'Title:  "Song"' in output
    assert "Year:   1999" in output
    assert 'Genre:  "Rock"' in output


def test_preview_lists_events(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.TEST, 1, console=_console(buffer))
    result = NormalizationResult(
        record=_record(title="01 song"),
        events=(
            ChangeEvent(TagField.TITLE, ChangeKind.FALLBACK_FILLED, "", "01 song", "filename"),
        ),
    )

    reporter.report_file(_outcome(CommandMode.TEST, result=result))

    assert 'title: "" → "01 song" (fallback-filled, filename)' in buffer.getvalue()


def test_preview_without_changes(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.TEST, 1, console=_console(buffer))
    result = NormalizationResult(record=_record(title="Song"))

    reporter.report_file(_outcome(CommandMode.TEST, result=result))

    assert "no changes" in buffer.getvalue()


def test_processing_line_uses_final_record(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.FIX, 4, console=_console(buffer))
    result = NormalizationResult(record=_record(title="01 song", artist="A", album="B"))

    reporter.report_file(_outcome(CommandMode.FIX, index=4, result=result))

    assert (
        '[4/4] Processing: Album/01 song.mp3 → Title: "01 song", Artist: "A", Album: "B"'
        in buffer.getvalue()
    )


def test_failures_print_even_when_quiet(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.CHECK, 2, console=_console(buffer), quiet=True)

    reporter.report_file(_outcome(CommandMode.CHECK, index=2, success=False, error_message="boom"))
    reporter.report_file(_outcome(CommandMode.CHECK, record=_record(title="x")))
    reporter.report_statistics(Statistics(total=2, success=1, failed=1))

    output = buffer.getvalue()
    assert "[2/2] Error: Album/01 song.mp3: boom" in output
    assert "Processing" not in output
    assert "Statistics" not in output


def test_statistics_block_for_write_modes(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.TAG, 3, console=_console(buffer))

    reporter.report_statistics(
        Statistics(total=3, success=3, encoding_fixed=4, tags_updated=3, auto_albums=1, auto_titles=2)
    )

    output = buffer.getvalue()
    assert "Total files: 3" in output
    assert "Successful: 3" in output
    assert "Failed: 0" in output
    assert "Encoding fixed: 4" in output
    assert "Tags updated: 3" in output
    assert "Auto albums: 1" in output
    assert "Auto titles: 2" in output


def test_statistics_block_for_read_only_modes(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.SCAN, 1, console=_console(buffer))

    reporter.report_statistics(Statistics(total=1, success=1))

    output = buffer.getvalue()
    assert "Total files: 1" in output
    assert "Encoding fixed" not in output


def test_processing_line_lists_change_descriptions(buffer: StringIO) -> None:
    reporter = ConsoleReporter(CommandMode.FIX, 1, console=_console(buffer))
    result = NormalizationResult(
        record=_record(title="中文", album="Best Of"),
        events=(
            ChangeEvent(TagField.TITLE, ChangeKind.ENCODING_FIXED, "ÖÐÎÄ", "中文", "GB2312"),
            ChangeEvent(TagField.ALBUM, ChangeKind.FALLBACK_FILLED, "", "Best Of", "directory"),
        ),
    )

    reporter.report_file(_outcome(CommandMode.FIX, result=result))

    output = buffer.getvalue()
    assert "Title: GB2312 -> UTF-8" in output
    assert "Album='Best Of' (from directory, fallback)" in output


def test_summary_line_follows_text_field_order() -> None:
    record = _record(album="C", title="A", artist="B")

    assert list(record.text_fields()) == [TagField.TITLE, TagField.ARTIST, TagField.ALBUM]
    assert format_summary_line(record) == 'Title: "A", Artist: "B", Album: "C"'
