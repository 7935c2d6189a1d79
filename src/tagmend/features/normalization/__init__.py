# Where: tagmend.features.normalization.__init__
# What: Expose the normalization pipeline, batch coordinator and adapters.
# Why: Provide a cohesive import surface for UI and integration layers.

from .adapters import DirectoryScanner, MutagenTagStore
from .domain import (
    ChangeEvent,
    ChangeKind,
    DirectoryScanError,
    EncodingDetectionError,
    ReadError,
    TagmendError,
    WriteError,
)
from .usecases import (
    BatchCoordinator,
    BatchEvent,
    BatchReport,
    BatchReporter,
    CommandMode,
    CoordinatorState,
    FileOutcome,
    NormalizationOptions,
    NormalizationPipeline,
    NormalizationResult,
    ScannedFile,
    Statistics,
    normalize,
)

__all__ = [
    "BatchCoordinator",
    "BatchEvent",
    "BatchReport",
    "BatchReporter",
    "ChangeEvent",
    "ChangeKind",
    "CommandMode",
    "CoordinatorState",
    "DirectoryScanError",
    "DirectoryScanner",
    "EncodingDetectionError",
    "FileOutcome",
    "MutagenTagStore",
    "NormalizationOptions",
    "NormalizationPipeline",
    "NormalizationResult",
    "ReadError",
    "ScannedFile",
    "Statistics",
    "TagmendError",
    "WriteError",
    "normalize",
]
