"""
Summary: Exception taxonomy for tag normalization runs.
Why: Let the coordinator tell per-file failures apart from fatal scan errors.
"""

from __future__ import annotations

from pathlib import Path


class TagmendError(Exception):
    """Base class for every error raised by tagmend."""


class EncodingDetectionError(TagmendError):
    """Raised when a charset cannot be detected or decoded; never fatal."""


class DirectoryScanError(TagmendError):
    """Raised when the scan root cannot be walked; aborts the whole run."""

    def __init__(self, root: Path, reason: str) -> None:
        super().__init__(f"Cannot scan {root}: {reason}")
        self.root: Path = root
        self.reason: str = reason


class _FileError(TagmendError):
    action: str = "access"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to {self.action} tags for {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class ReadError(_FileError):
    """Raised when the tag store cannot parse a file."""

    action = "read"


class WriteError(_FileError):
    """Raised when tags cannot be written to the destination."""

    action = "write"


__all__ = [
    "DirectoryScanError",
    "EncodingDetectionError",
    "ReadError",
    "TagmendError",
    "WriteError",
]
