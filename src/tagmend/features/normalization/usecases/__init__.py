"""Use cases for tag normalization: the per-file pipeline and the batch coordinator."""

from .batch_coordinator import BatchCoordinator, effective_options
from .pipeline import NormalizationPipeline, normalize, normalize_record
from .ports import BatchReporter, DirectoryWalkerPort, TagStorePort
from .processing_types import (
    BatchEvent,
    BatchReport,
    CommandMode,
    CoordinatorState,
    FileOutcome,
    NormalizationOptions,
    NormalizationResult,
    ScannedFile,
    Statistics,
)

__all__ = [
    "BatchCoordinator",
    "BatchEvent",
    "BatchReport",
    "BatchReporter",
    "CommandMode",
    "CoordinatorState",
    "DirectoryWalkerPort",
    "FileOutcome",
    "NormalizationOptions",
    "NormalizationPipeline",
    "NormalizationResult",
    "ScannedFile",
    "Statistics",
    "TagStorePort",
    "effective_options",
    "normalize",
    "normalize_record",
]
