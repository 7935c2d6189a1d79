"""
Summary: Per-file normalization pipeline for the title, artist and album fields.
Why: Apply encoding repair, cleanup, zero-padding and fallback in a fixed order as a pure function.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from tagmend.shared.media_record import MediaRecord, TagField

from ..domain import tag_cleaner
from ..domain.encoding_repair import fix_encoding, is_garbled
from ..domain.events import ChangeEvent, ChangeKind
from ..domain.fallback import FallbackContext, format_title
from .processing_types import NormalizationOptions, NormalizationResult

_FALLBACK_SOURCES: Final[dict[TagField, tuple[str, Callable[[FallbackContext], str | None]]]] = {
    TagField.TITLE: ("filename", FallbackContext.title),
    TagField.ARTIST: ("directory", FallbackContext.artist),
    TagField.ALBUM: ("directory", FallbackContext.album),
}


def _normalize_field(
    tag_field: TagField,
    original: str,
    options: NormalizationOptions,
    context: FallbackContext,
) -> tuple[str, list[ChangeEvent]]:
    events: list[ChangeEvent] = []
    value = original

    if value:
        fix = fix_encoding(value)
        if fix.changed:
            events.append(
                ChangeEvent(tag_field, ChangeKind.ENCODING_FIXED, value, fix.text, fix.source_label)
            )
            value = fix.text

        cleaned = tag_cleaner.clean(value)
        if cleaned != value:
            events.append(ChangeEvent(tag_field, ChangeKind.CLEANED, value, cleaned))
            value = cleaned

    if tag_field is TagField.TITLE and value and not options.update_encoding_only:
        formatted = format_title(value)
        if formatted != value:
            events.append(ChangeEvent(tag_field, ChangeKind.ZERO_PADDED, value, formatted))
            value = formatted

    if not value or is_garbled(value) or options.unconditional_overwrite:
        origin, derive = _FALLBACK_SOURCES[tag_field]
        derived = derive(context)
        if derived is not None and derived != value:
            events.append(
                ChangeEvent(tag_field, ChangeKind.FALLBACK_FILLED, value, derived, origin)
            )
            value = derived

    return value, events


def normalize_record(
    record: MediaRecord,
    options: NormalizationOptions,
    context: FallbackContext,
) -> NormalizationResult:
    """Normalize the text fields of ``record`` using a prepared fallback context."""

    values: dict[str, str] = {}
    events: list[ChangeEvent] = []
    for tag_field in TagField:
        value, field_events = _normalize_field(tag_field, record.get_text(tag_field), options, context)
        values[tag_field.value] = value
        events.extend(field_events)
    return NormalizationResult(record=record.with_fields(**values), events=tuple(events))


def normalize(
    record: MediaRecord,
    options: NormalizationOptions,
    filename_stem: str,
    parent_dir_name: str,
) -> NormalizationResult:
    """Normalize ``record`` given its filename stem and parent directory name.

    Args:
        record: Tags as read from the tag store. Not modified.
        options: Pipeline switches.
        filename_stem: File name without extension, used for title fallback.
        parent_dir_name: Immediate parent directory, used for artist/album fallback.

    Returns:
        NormalizationResult: The updated copy and the ordered change events.
    """
    context = FallbackContext.from_names(filename_stem, parent_dir_name)
    return normalize_record(record, options, context)


class NormalizationPipeline:
    """Pipeline bound to one set of options."""

    def __init__(self, options: NormalizationOptions) -> None:
        self.options: NormalizationOptions = options

    def run(self, record: MediaRecord, filename_stem: str, parent_dir_name: str) -> NormalizationResult:
        return normalize(record, self.options, filename_stem, parent_dir_name)

    def run_for_path(self, record: MediaRecord) -> NormalizationResult:
        """Normalize using the stem and parent directory of ``record.path``."""
        return normalize_record(record, self.options, FallbackContext.from_path(record.path))


__all__ = ["NormalizationPipeline", "normalize", "normalize_record"]
