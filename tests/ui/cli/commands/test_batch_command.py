"""Tests for the batch command executor."""

from io import StringIO
from pathlib import Path

from rich.console import Console

from tagmend.features.normalization import CommandMode, ScannedFile
from tagmend.shared.media_record import MediaRecord
from tagmend.ui.cli.args import RunArgs
from tagmend.ui.cli.commands import BatchCommand

ROOT = Path("/library")


class _StaticScanner:
    def __init__(self, files: list[ScannedFile]) -> None:
        self.files = files
        self.roots: list[Path] = []

    def scan(self, root: Path) -> list[ScannedFile]:
        self.roots.append(root)
        return self.files


class _MemoryTagStore:
    def __init__(self) -> None:
        self.written: dict[Path, MediaRecord] = {}

    def read(self, path: Path) -> MediaRecord:
        return MediaRecord(path=path, relative_path=Path(path.name), title="1 Song")

    def write(self, path: Path, record: MediaRecord) -> None:
        self.written[path] = record

    def write_to_copy(self, source: Path, destination: Path, record: MediaRecord) -> None:
        self.written[destination] = record


def _args(command: CommandMode, **overrides: object) -> RunArgs:
    values: dict[str, object] = {
        "command": command,
        "music_path": ROOT,
        "verbose": False,
        "quiet": False,
        "thread_count": 2,
    }
    values.update(overrides)
    return RunArgs(**values)  # pyright: ignore[reportArgumentType]


def _files(*names: str) -> list[ScannedFile]:
    return [ScannedFile(ROOT / "Album" / name, Path("Album") / name) for name in names]


def test_check_command_reports_every_file() -> None:
    buffer = StringIO()
    scanner = _StaticScanner(_files("a.mp3", "b.mp3"))
    command = BatchCommand(
        _args(CommandMode.CHECK),
        tag_store=_MemoryTagStore(),
        scanner=scanner,
        console=Console(file=buffer, width=200),
    )

    report = command.execute()

    assert scanner.roots == [ROOT]
    assert report.statistics.total == 2
    assert report.statistics.success == 2
    assert "Found 2 audio files" in buffer.getvalue()
    assert "Album/a.mp3" in buffer.getvalue()


def test_tag_in_place_writes_source_files() -> None:
    store = _MemoryTagStore()
    command = BatchCommand(
        _args(CommandMode.TAG, update_encoding_only=False),
        tag_store=store,
        scanner=_StaticScanner(_files("x.mp3")),
        console=Console(file=StringIO(), width=200),
    )

    report = command.execute()

    target = ROOT / "Album" / "x.mp3"
    assert report.statistics.tags_updated == 1
    assert store.written[target].title == "01 Song"


def test_fix_mirrors_into_output_root(tmp_path: Path) -> None:
    store = _MemoryTagStore()
    command = BatchCommand(
        _args(CommandMode.FIX, output_root=tmp_path / "out"),
        tag_store=store,
        scanner=_StaticScanner(_files("x.mp3")),
        console=Console(file=StringIO(), width=200),
    )

    _ = command.execute()

    assert list(store.written) == [tmp_path / "out" / "Album" / "x.mp3"]


def test_empty_directory_skips_header() -> None:
    buffer = StringIO()
    command = BatchCommand(
        _args(CommandMode.SCAN),
        tag_store=_MemoryTagStore(),
        scanner=_StaticScanner([]),
        console=Console(file=buffer, width=200),
    )

    report = command.execute()

    assert report.statistics.total == 0
    assert "Found" not in buffer.getvalue()
