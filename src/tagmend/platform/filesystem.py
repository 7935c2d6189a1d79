"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import shutil
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def copy_file(source: Path, destination: Path) -> Path:
    """Copy ``source`` to ``destination`` with metadata, creating parents as needed."""

    _ = ensure_parent_directory(destination)
    _ = shutil.copy2(source, destination)
    return destination


__all__ = ["copy_file", "ensure_directory", "ensure_parent_directory"]
