"""
Summary: Derive title, artist and album from the filename stem and parent directory.
Why: Fill tags that are missing or unrecoverable from the context a file is stored in.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .encoding_repair import repair_path_component

_PURE_NUMBER: Final[re.Pattern[str]] = re.compile(r"[0-9]+")
_TRAILING_NUMBER: Final[re.Pattern[str]] = re.compile(r"(.+?)([0-9]+)")
_LEADING_NUMBER: Final[re.Pattern[str]] = re.compile(r"([0-9]+)\s+(.+)")

ARTIST_SEPARATOR: Final[str] = "_"
PAD_WIDTH: Final[int] = 2


def format_title_from_filename(stem: str) -> str:
    """Move a trailing track number to the front, zero-padded.

    Examples:
        ``"Foo 5"`` -> ``"05 Foo"``, ``"5"`` -> ``"05"``, ``"007"`` -> ``"007"``,
        ``"Intro"`` -> ``"Intro"``.
    """
    if _PURE_NUMBER.fullmatch(stem):
        return stem.zfill(PAD_WIDTH)

    match = _TRAILING_NUMBER.fullmatch(stem)
    if match is None:
        return stem

    text = match.group(1).strip(" ")
    number = match.group(2).zfill(PAD_WIDTH)
    return f"{number} {text}" if text else number


def format_title(title: str) -> str:
    """Zero-pad a single leading digit: ``"1 Song"`` -> ``"01 Song"``."""

    match = _LEADING_NUMBER.fullmatch(title)
    if match is None or len(match.group(1)) != 1:
        return title
    return f"{match.group(1).zfill(PAD_WIDTH)} {match.group(2)}"


def _usable_directory(name: str) -> bool:
    return bool(name) and name != "."


def album_from_directory(directory: str) -> str | None:
    return directory if _usable_directory(directory) else None


def artist_from_directory(directory: str) -> str | None:
    """Use the text before the first ``_`` or, without one, the whole name."""

    if not _usable_directory(directory):
        return None
    if ARTIST_SEPARATOR in directory:
        head = directory.split(ARTIST_SEPARATOR, 1)[0]
        return head or None
    return directory


@dataclass(frozen=True, slots=True)
class FallbackContext:
    """Encoding-repaired filename stem and parent directory name of one file."""

    stem: str
    directory: str

    @classmethod
    def from_names(cls, stem: str, directory: str) -> "FallbackContext":
        return cls(stem=repair_path_component(stem), directory=repair_path_component(directory))

    @classmethod
    def from_path(cls, path: Path) -> "FallbackContext":
        return cls.from_names(path.stem, path.parent.name)

    def title(self) -> str | None:
        """Title from the stem; ``"1 song"`` and ``"song 1"`` both gain a padded number."""
        if not self.stem:
            return None
        return format_title(format_title_from_filename(self.stem))

    def album(self) -> str | None:
        return album_from_directory(self.directory)

    def artist(self) -> str | None:
        return artist_from_directory(self.directory)


__all__ = [
    "FallbackContext",
    "album_from_directory",
    "artist_from_directory",
    "format_title",
    "format_title_from_filename",
]
