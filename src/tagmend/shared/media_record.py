# Where: tagmend.shared.media_record
# What: Canonical MediaRecord dataclass shared across features.
# Why: One representation of a file's tag fields for the tag store, pipeline and UI.

from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path


class TagField(StrEnum):
    """Text fields the normalization pipeline works on."""

    TITLE = "title"
    ARTIST = "artist"
    ALBUM = "album"


@dataclass
class MediaRecord:
    """Tag fields read from one audio file.

    ``year`` and ``track_number`` use ``0`` for "absent".
    """

    path: Path
    relative_path: Path
    title: str = ""
    artist: str = ""
    album: str = ""
    year: int = 0
    genre: str = ""
    track_number: int = 0
    comment: str = ""

    def get_text(self, field: TagField) -> str:
        return getattr(self, field.value)

    def text_fields(self) -> dict[TagField, str]:
        """Return the normalizable text fields keyed by ``TagField``."""
        return {field: self.get_text(field) for field in TagField}

    def with_fields(self, **changes: object) -> "MediaRecord":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)


__all__ = ["MediaRecord", "TagField"]
