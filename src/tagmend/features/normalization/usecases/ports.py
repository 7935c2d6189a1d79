"""
Summary: Ports defining normalization use case dependencies.
Why: Decouple the coordinator from mutagen, the filesystem and the console so tests and swaps stay simple.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from tagmend.shared.media_record import MediaRecord

from .processing_types import FileOutcome, ScannedFile, Statistics


@runtime_checkable
class TagStorePort(Protocol):
    """Port for reading and writing the text tags of one audio file."""

    def read(self, path: Path) -> MediaRecord:
        """Read the tags of ``path``; raises ``ReadError``."""
        ...

    def write(self, path: Path, record: MediaRecord) -> None:
        """Write ``record`` into ``path`` in place; raises ``WriteError``."""
        ...

    def write_to_copy(self, source: Path, destination: Path, record: MediaRecord) -> None:
        """Copy ``source`` to ``destination`` and write ``record`` there; raises ``WriteError``."""
        ...


@runtime_checkable
class DirectoryWalkerPort(Protocol):
    """Port for discovering audio files below a root directory."""

    def scan(self, root: Path) -> list[ScannedFile]:
        """Return supported files in a stable order; raises ``DirectoryScanError``."""
        ...


@runtime_checkable
class BatchReporter(Protocol):
    """Port for presenting per-file outcomes and the final statistics."""

    def report_file(self, outcome: FileOutcome) -> None:
        """Called on the coordinating thread once per completed job."""
        ...

    def report_statistics(self, statistics: Statistics) -> None:
        """Called exactly once after every job has been collected."""
        ...


__all__ = ["BatchReporter", "DirectoryWalkerPort", "TagStorePort"]
