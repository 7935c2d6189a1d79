"""Adapters binding normalization ports to mutagen and the filesystem."""

from .directory_scanner import DirectoryScanner
from .tag_store import SUPPORTED_FORMATS, MutagenTagStore

__all__ = ["DirectoryScanner", "MutagenTagStore", "SUPPORTED_FORMATS"]
