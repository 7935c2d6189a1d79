"""Format-specific tag stores.

Where: src/tagmend/features/normalization/adapters/tag_store/format_stores.py
What: Concrete tag stores for ID3, Vorbis comment, MP4 and ASF containers.
Why: Separate format logic from the facade to simplify future maintenance and extensions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, cast, override

from mutagen.asf import ASF
from mutagen.flac import FLAC
from mutagen.id3 import COMM, ID3, Encoding, Frames, ID3NoHeaderError
from mutagen.mp4 import MP4
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis

from ._base_stores import BaseMutagenTagStore
from ._tag_utils import parse_slash_separated, safe_get_first

__all__ = [
    "AsfTagStore",
    "FlacTagStore",
    "Id3TagStore",
    "M4aTagStore",
    "OggVorbisTagStore",
    "OpusTagStore",
]

_VORBIS_MAPPING: dict[str, str] = {
    "title": "title",
    "artist": "artist",
    "album": "album",
    "year": "date",
    "genre": "genre",
    "track": "tracknumber",
    "comment": "comment",
}


class Id3TagStore(BaseMutagenTagStore):
    """Tag store for MP3 files using raw ID3 frames, saved as ID3v2.4 UTF-8."""

    FILE_CLASS: ClassVar[type | None] = ID3

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "TIT2",
        "artist": "TPE1",
        "album": "TALB",
        "year": "TDRC",
        "genre": "TCON",
        "track": "TRCK",
        "comment": "COMM",
    }

    @override
    def _open_file(self, path: Path) -> Any:
        # Files without an ID3 header behave like an empty tag set.
        try:
            return ID3(path)
        except ID3NoHeaderError:
            return ID3()

    @override
    def _tags_of(self, audio: Any) -> Any:
        return audio

    @override
    def _save(self, audio: Any, path: Path) -> None:
        cast(ID3, audio).save(path, v2_version=4)

    @override
    def _get_tag_value(self, tags: ID3, key: str) -> str | None:
        if key == "COMM":
            comments = tags.getall("COMM")
            frame = comments[0] if comments else None
        else:
            frame = tags.get(key)
        if frame is None:
            return None
        if key == "TCON":
            genres = cast(list[str], frame.genres)
            return genres[0] if genres else None
        text = cast(list[object], frame.text)
        return str(text[0]) if text else None

    @override
    def _set_tag_value(self, tags: ID3, key: str, value: str) -> None:
        if key == "COMM":
            tags.delall("COMM")
            tags.add(COMM(encoding=Encoding.UTF8, lang="eng", desc="", text=[value]))
            return
        tags.add(Frames[key](encoding=Encoding.UTF8, text=[value]))


class VorbisCommentTagStore(BaseMutagenTagStore):
    """Shared accessors for containers carrying Vorbis comments."""

    TAG_MAPPING: ClassVar[dict[str, str]] = _VORBIS_MAPPING

    @override
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        values = cast(list[str] | None, tags.get(key))
        return safe_get_first(values) or None

    @override
    def _set_tag_value(self, tags: Any, key: str, value: str) -> None:
        tags[key] = [value]


class FlacTagStore(VorbisCommentTagStore):
    """Tag store for FLAC files."""

    FILE_CLASS: ClassVar[type | None] = FLAC


class OggVorbisTagStore(VorbisCommentTagStore):
    """Tag store for Ogg Vorbis files."""

    FILE_CLASS: ClassVar[type | None] = OggVorbis


class OpusTagStore(VorbisCommentTagStore):
    """Tag store for Opus (.opus) files."""

    FILE_CLASS: ClassVar[type | None] = OggOpus


class M4aTagStore(BaseMutagenTagStore):
    """Tag store for M4A files using MP4 atoms."""

    FILE_CLASS: ClassVar[type | None] = MP4

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "\xa9nam",
        "artist": "\xa9ART",
        "album": "\xa9alb",
        "year": "\xa9day",
        "genre": "\xa9gen",
        "track": "trkn",
        "comment": "\xa9cmt",
    }

    @override
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        if key == "trkn":
            value = cast(list[tuple[int, int]] | None, tags.get(key))
            if not value:
                return None
            number, total = value[0]
            return f"{number or ''}/{total or ''}"
        values = cast(list[str] | None, tags.get(key))
        return safe_get_first(values) or None

    @override
    def _set_tag_value(self, tags: Any, key: str, value: str) -> None:
        tags[key] = [value]

    @override
    def _set_track_number(self, tags: Any, key: str, track_number: int) -> None:
        _, total = parse_slash_separated(self._get_tag_value(tags, key) or "")
        tags[key] = [(track_number, total or 0)]


class AsfTagStore(BaseMutagenTagStore):
    """Tag store for WMA files using ASF attributes."""

    FILE_CLASS: ClassVar[type | None] = ASF

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "Title",
        "artist": "Author",
        "album": "WM/AlbumTitle",
        "year": "WM/Year",
        "genre": "WM/Genre",
        "track": "WM/TrackNumber",
        "comment": "Description",
    }

    @override
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        values = cast(list[object] | None, tags.get(key))
        if not values:
            return None
        return str(values[0])

    @override
    def _set_tag_value(self, tags: Any, key: str, value: str) -> None:
        tags[key] = [value]
