"""
Summary: Pure text rules for tag normalization.
Why: Keep encoding, cleanup and fallback heuristics testable without I/O.
"""

from . import encoding_repair, fallback, tag_cleaner
from .errors import (
    DirectoryScanError,
    EncodingDetectionError,
    ReadError,
    TagmendError,
    WriteError,
)
from .events import ChangeEvent, ChangeKind
from .fallback import FallbackContext

__all__ = [
    "ChangeEvent",
    "ChangeKind",
    "DirectoryScanError",
    "EncodingDetectionError",
    "FallbackContext",
    "ReadError",
    "TagmendError",
    "WriteError",
    "encoding_repair",
    "fallback",
    "tag_cleaner",
]
