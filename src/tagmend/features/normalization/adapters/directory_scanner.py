"""src/tagmend/features/normalization/adapters/directory_scanner.py
What: Adapter implementing DirectoryWalkerPort on top of ``Path.walk``.
Why: Keep filesystem traversal in adapters while the coordinator targets abstractions."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..domain.errors import DirectoryScanError
from ..usecases.ports import DirectoryWalkerPort
from ..usecases.processing_types import ScannedFile
from .tag_store import SUPPORTED_FORMATS


class DirectoryScanner(DirectoryWalkerPort):
    """Recursively collect supported audio files in a deterministic order."""

    def __init__(self, extensions: Iterable[str] = SUPPORTED_FORMATS) -> None:
        self.extensions: frozenset[str] = frozenset(ext.lower() for ext in extensions)

    def is_supported(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def scan(self, root: Path) -> list[ScannedFile]:
        if not root.exists():
            raise DirectoryScanError(root, "directory does not exist")
        if not root.is_dir():
            raise DirectoryScanError(root, "not a directory")
        # Scanned paths are absolute so parent names are real directory names.
        root = root.resolve()

        def _raise(error: OSError) -> None:
            raise DirectoryScanError(root, str(error)) from error

        found: list[ScannedFile] = []
        for current, dirnames, filenames in root.walk(on_error=_raise):
            dirnames.sort()
            for name in sorted(filenames):
                path = current / name
                if self.is_supported(path):
                    found.append(ScannedFile(path=path, relative_path=path.relative_to(root)))
        return found


__all__ = ["DirectoryScanner"]
