"""
Summary: Architecture checks keeping the normalization pipeline and domain free of I/O concerns.
Why: The per-file pipeline runs on worker threads and must stay a pure function of its inputs.
"""

from __future__ import annotations

from pathlib import Path

import pytest

FORBIDDEN_IMPORTS: tuple[str, ...] = (
    "import threading",
    "import logging",
    "concurrent.futures",
    "tagmend.platform",
    "tagmend.ui",
)

REPO_ROOT = Path(__file__).resolve().parents[2]
NORMALIZATION_DIR = REPO_ROOT / "src" / "tagmend" / "features" / "normalization"
PURE_MODULES: tuple[Path, ...] = (
    *sorted((NORMALIZATION_DIR / "domain").glob("*.py")),
    NORMALIZATION_DIR / "usecases" / "pipeline.py",
)


@pytest.mark.parametrize(
    "module_path", PURE_MODULES, ids=lambda path: str(path.relative_to(REPO_ROOT))
)
def test_pure_modules_avoid_io_imports(module_path: Path) -> None:
    """Ensure domain rules and the pipeline import no threading, logging or platform code."""

    contents = module_path.read_text(encoding="utf-8")
    offending = [needle for needle in FORBIDDEN_IMPORTS if needle in contents]
    assert offending == [], (
        f"{module_path.relative_to(REPO_ROOT)} must stay pure; found: {', '.join(offending)}"
    )


def test_usecases_do_not_import_adapters() -> None:
    """Ensure use cases depend on ports rather than the mutagen adapters."""

    usecases_dir = NORMALIZATION_DIR / "usecases"
    offending_files: list[Path] = []
    for path in usecases_dir.rglob("*.py"):
        import_lines = [
            line.strip()
            for line in path.read_text(encoding="utf-8").splitlines()
            if line.startswith(("import ", "from "))
        ]
        if any("mutagen" in line or "adapters" in line for line in import_lines):
            offending_files.append(path)
    assert offending_files == [], (
        "Use case modules must depend on tag store ports; found adapter imports in: "
        f"{', '.join(str(path.relative_to(REPO_ROOT)) for path in offending_files)}"
    )
