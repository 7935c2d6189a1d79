"""src/tagmend/features/normalization/usecases/processing_types.py
Where: Normalization feature usecases layer.
What: Shared enums and dataclasses for the pipeline and batch coordinator.
Why: Keep the pipeline and coordinator modules lean by centralising type definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from tagmend.shared.media_record import MediaRecord, TagField

from ..domain.events import ChangeEvent, ChangeKind


class CommandMode(StrEnum):
    """Batch commands and their side effects."""

    SCAN = "scan"
    CHECK = "check"
    TEST = "test"
    FIX = "fix"
    TAG = "tag"

    @property
    def writes(self) -> bool:
        return self in (CommandMode.FIX, CommandMode.TAG)


class CoordinatorState(StrEnum):
    """Lifecycle of one ``BatchCoordinator.run`` invocation."""

    IDLE = "idle"
    DISPATCHING = "dispatching"
    DRAINING = "draining"
    REPORTING = "reporting"
    DONE = "done"


class BatchEvent(StrEnum):
    """Structured event identifiers for batch logs."""

    BATCH_START = "batch.start"
    BATCH_COMPLETE = "batch.complete"
    BATCH_NO_FILES = "batch.no_files"
    FILE_WRITTEN = "file.written"
    FILE_ERROR = "file.error"


@dataclass(frozen=True, slots=True)
class NormalizationOptions:
    """Switches controlling the pipeline and the batch run.

    Attributes:
        force: Allow filename/directory derivation to overwrite existing values.
        force_all: Together with ``force``, overwrite every field unconditionally.
        update_encoding_only: Skip title zero-padding and unconditional overwrite.
        output_root: Mirror root for written files; None writes in place.
        thread_count: Worker threads used by the coordinator.
    """

    force: bool = False
    force_all: bool = False
    update_encoding_only: bool = False
    output_root: Path | None = None
    thread_count: int = 5

    @property
    def unconditional_overwrite(self) -> bool:
        return self.force and self.force_all and not self.update_encoding_only


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Normalized record plus the ordered change events that produced it."""

    record: MediaRecord
    events: tuple[ChangeEvent, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.events)

    def events_for(self, tag_field: TagField) -> tuple[ChangeEvent, ...]:
        return tuple(event for event in self.events if event.field is tag_field)

    def has(self, tag_field: TagField, kind: ChangeKind) -> bool:
        return any(event.kind is kind for event in self.events_for(tag_field))


@dataclass(frozen=True, slots=True)
class ScannedFile:
    """Audio file found under a scan root."""

    path: Path
    relative_path: Path


@dataclass(slots=True)
class Statistics:
    """Aggregate counters owned by the batch coordinator."""

    total: int = 0
    success: int = 0
    failed: int = 0
    encoding_fixed: int = 0
    tags_updated: int = 0
    auto_albums: int = 0
    auto_titles: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Return a dictionary suitable for structured logging extras."""

        return {
            "total": self.total,
            "success": self.success,
            "failed": self.failed,
            "encoding_fixed": self.encoding_fixed,
            "tags_updated": self.tags_updated,
            "auto_albums": self.auto_albums,
            "auto_titles": self.auto_titles,
        }


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one scanned file."""

    scanned: ScannedFile
    mode: CommandMode
    dispatch_index: int
    success: bool
    record: MediaRecord | None = None
    result: NormalizationResult | None = None
    written_path: Path | None = None
    error_message: str | None = None

    @property
    def final_record(self) -> MediaRecord | None:
        """The record as it was (or would be) written."""
        if self.result is not None:
            return self.result.record
        return self.record


@dataclass(frozen=True)
class BatchReport:
    """Everything a run produced, ordered by dispatch index."""

    statistics: Statistics
    outcomes: tuple[FileOutcome, ...] = field(default_factory=tuple)

    @property
    def failures(self) -> tuple[FileOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.success)


__all__ = [
    "BatchEvent",
    "BatchReport",
    "CommandMode",
    "CoordinatorState",
    "FileOutcome",
    "NormalizationOptions",
    "NormalizationResult",
    "ScannedFile",
    "Statistics",
]
