"""Tag utility helpers.

Where: src/tagmend/features/normalization/adapters/tag_store/_tag_utils.py
What: Pure helpers for parsing numeric tag values and reading first list entries.
Why: Share the small parsing rules between the per-format tag stores.
"""

from __future__ import annotations

__all__ = [
    "parse_slash_separated",
    "parse_track_number",
    "parse_year",
    "safe_get_first",
]


def safe_get_first(data: list[str] | None, default: str = "") -> str:
    """Safely get the first element from a list or return the default."""
    return data[0] if data else default


def parse_slash_separated(value: str) -> tuple[int | None, int | None]:
    """Parse a string in 'number/total' format.

    Returns a tuple (number, total) or (None, None) if conversion fails.
    """
    parts: list[str] = value.strip().split(sep="/") if value else []
    num: int | None = int(parts[0]) if parts and parts[0].isdigit() else None
    total: int | None = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else None
    return num, total


def parse_track_number(value: str | None) -> int:
    """Return the track number of ``"3"`` or ``"3/12"``, or ``0`` when absent."""
    number, _ = parse_slash_separated(value or "")
    return number or 0


def parse_year(date_str: str | None) -> int:
    """Parse a year from a string (expects the first 4 characters to be digits)."""
    text = (date_str or "").strip()
    return int(text[:4]) if len(text) >= 4 and text[:4].isdigit() else 0
