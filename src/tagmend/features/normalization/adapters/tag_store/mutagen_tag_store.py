"""Audio file tag store.

Where: src/tagmend/features/normalization/adapters/tag_store/mutagen_tag_store.py
What: Provide the MutagenTagStore facade routing to per-format stores.
Why: Give the batch coordinator one TagStorePort implementation for every supported container.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from tagmend.platform.filesystem import copy_file
from tagmend.shared.media_record import MediaRecord

from ...domain.errors import ReadError, WriteError
from ._base_stores import AudioTagStore
from .format_stores import (
    AsfTagStore,
    FlacTagStore,
    Id3TagStore,
    M4aTagStore,
    OggVorbisTagStore,
    OpusTagStore,
)

__all__ = ["MutagenTagStore", "SUPPORTED_FORMATS"]

SUPPORTED_FORMATS: frozenset[str] = frozenset(
    {".mp3", ".flac", ".ogg", ".opus", ".m4a", ".wma"}
)


class MutagenTagStore:
    """Facade class for reading and writing tags of audio files.

    This class selects the appropriate store based on file extension.
    """

    SUPPORTED_FORMATS: ClassVar[frozenset[str]] = SUPPORTED_FORMATS

    # Mapping from file extension to corresponding store instance.
    _format_map: ClassVar[dict[str, AudioTagStore]] = {
        ".mp3": Id3TagStore(),
        ".flac": FlacTagStore(),
        ".ogg": OggVorbisTagStore(),
        ".opus": OpusTagStore(),
        ".m4a": M4aTagStore(),
        ".wma": AsfTagStore(),
    }

    @classmethod
    def supports(cls, path: Path) -> bool:
        return path.suffix.lower() in cls.SUPPORTED_FORMATS

    def read(self, path: Path) -> MediaRecord:
        """Read tags from an audio file.

        Args:
            path: Path to the audio file.

        Returns:
            MediaRecord: Tag values; empty strings and zeros where absent.

        Raises:
            ReadError: If the format is unsupported or the file cannot be parsed.
        """
        ext = path.suffix.lower()
        if ext not in self.SUPPORTED_FORMATS:
            raise ReadError(path, f"unsupported file format: {ext or '<none>'}")
        return self._format_map[ext].read(path)

    def write(self, path: Path, record: MediaRecord) -> None:
        """Write the non-empty fields of ``record`` into ``path``.

        Raises:
            WriteError: If the format is unsupported or saving fails.
        """
        ext = path.suffix.lower()
        if ext not in self.SUPPORTED_FORMATS:
            raise WriteError(path, f"unsupported file format: {ext or '<none>'}")
        self._format_map[ext].write(path, record)

    def write_to_copy(self, source: Path, destination: Path, record: MediaRecord) -> None:
        """Copy ``source`` to ``destination`` and write ``record`` into the copy."""

        try:
            _ = copy_file(source, destination)
        except OSError as exc:
            raise WriteError(destination, f"copy failed: {exc}") from exc
        self.write(destination, record)
