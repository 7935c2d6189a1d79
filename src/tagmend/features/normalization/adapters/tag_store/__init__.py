"""Mutagen-backed tag stores."""

from .format_stores import (
    AsfTagStore,
    FlacTagStore,
    Id3TagStore,
    M4aTagStore,
    OggVorbisTagStore,
    OpusTagStore,
)
from .mutagen_tag_store import SUPPORTED_FORMATS, MutagenTagStore

__all__ = [
    "AsfTagStore",
    "FlacTagStore",
    "Id3TagStore",
    "M4aTagStore",
    "MutagenTagStore",
    "OggVorbisTagStore",
    "OpusTagStore",
    "SUPPORTED_FORMATS",
]
