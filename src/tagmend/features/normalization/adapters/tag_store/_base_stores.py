"""Shared base classes for tag stores.

Where: src/tagmend/features/normalization/adapters/tag_store/_base_stores.py
What: Abstract read/write flow shared by every mutagen-backed format.
Why: Keep per-format classes down to a file class, a key mapping and value accessors.
"""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any, ClassVar, Final, override

from mutagen import MutagenError

from tagmend.platform.logging import logger
from tagmend.shared.media_record import MediaRecord, TagField

from ...domain.errors import ReadError, WriteError
from ._tag_utils import parse_track_number, parse_year

__all__ = [
    "AudioTagStore",
    "BaseMutagenTagStore",
    "TAG_KEYS",
]

TAG_KEYS: Final[tuple[str, ...]] = ("title", "artist", "album", "year", "genre", "track", "comment")


class AudioTagStore(abc.ABC):
    """Abstract base class for per-format tag stores."""

    @abc.abstractmethod
    def read(self, path: Path) -> MediaRecord:
        """Read tags from an audio file."""
        raise NotImplementedError

    @abc.abstractmethod
    def write(self, path: Path, record: MediaRecord) -> None:
        """Write tags into an audio file in place."""
        raise NotImplementedError


class BaseMutagenTagStore(AudioTagStore, abc.ABC):
    """Base class for tag stores built on a mutagen file class."""

    FILE_CLASS: ClassVar[type | None] = None

    TAG_MAPPING: ClassVar[dict[str, str]] = {key: "" for key in TAG_KEYS}

    @property
    def format_name(self) -> str:
        return self.__class__.__name__.replace("TagStore", "")

    def _open_file(self, path: Path) -> Any:
        if self.FILE_CLASS is None:
            raise NotImplementedError("FILE_CLASS must be defined in subclass")
        return self.FILE_CLASS(path)

    def _tags_of(self, audio: Any) -> Any:
        return getattr(audio, "tags", None)

    def _ensure_tags(self, audio: Any) -> Any:
        if self._tags_of(audio) is None:
            audio.add_tags()
        return self._tags_of(audio)

    def _save(self, audio: Any, path: Path) -> None:
        audio.save()

    @abc.abstractmethod
    def _get_tag_value(self, tags: Any, key: str) -> str | None:
        """Get a tag value as text."""
        raise NotImplementedError

    @abc.abstractmethod
    def _set_tag_value(self, tags: Any, key: str, value: str) -> None:
        """Replace a tag value with a single text entry."""
        raise NotImplementedError

    def _set_track_number(self, tags: Any, key: str, track_number: int) -> None:
        self._set_tag_value(tags, key, str(track_number))

    @override
    def read(self, path: Path) -> MediaRecord:
        try:
            audio = self._open_file(path)
        except (MutagenError, OSError) as exc:
            logger.debug("Failed to open %s tags from %s: %s", self.format_name, path, exc)
            raise ReadError(path, str(exc)) from exc

        record = MediaRecord(path=path, relative_path=Path(path.name))
        tags = self._tags_of(audio)
        if tags is None:
            return record

        def text(key: str) -> str:
            return self._get_tag_value(tags, self.TAG_MAPPING[key]) or ""

        return record.with_fields(
            title=text("title"),
            artist=text("artist"),
            album=text("album"),
            year=parse_year(text("year")),
            genre=text("genre"),
            track_number=parse_track_number(text("track")),
            comment=text("comment"),
        )

    @override
    def write(self, path: Path, record: MediaRecord) -> None:
        """Write the non-empty fields of ``record``; existing values are never blanked."""

        try:
            audio = self._open_file(path)
            tags = self._ensure_tags(audio)
            text_values = {
                "title": record.get_text(TagField.TITLE),
                "artist": record.get_text(TagField.ARTIST),
                "album": record.get_text(TagField.ALBUM),
                "genre": record.genre,
                "comment": record.comment,
            }
            for key, value in text_values.items():
                if value:
                    self._set_tag_value(tags, self.TAG_MAPPING[key], value)
            if record.year > 0:
                self._set_tag_value(tags, self.TAG_MAPPING["year"], str(record.year))
            if record.track_number > 0:
                self._set_track_number(tags, self.TAG_MAPPING["track"], record.track_number)
            self._save(audio, path)
        except (MutagenError, OSError, ValueError) as exc:
            logger.debug("Failed to save %s tags to %s: %s", self.format_name, path, exc)
            raise WriteError(path, str(exc)) from exc
