"""src/tagmend/features/normalization/usecases/batch_coordinator.py
Where: Normalization feature usecases layer.
What: Fan scanned files out to a worker pool, isolate per-file failures and fold statistics.
Why: One place owns concurrency, counters and reporting so the pipeline stays pure.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from pathlib import Path
from typing import Any, Final

from tagmend.platform.logging import logger
from tagmend.shared.media_record import MediaRecord, TagField

from ..domain.errors import ReadError, WriteError
from ..domain.events import ChangeKind
from .pipeline import NormalizationPipeline
from .ports import BatchReporter, TagStorePort
from .processing_types import (
    BatchEvent,
    BatchReport,
    CommandMode,
    CoordinatorState,
    FileOutcome,
    NormalizationOptions,
    ScannedFile,
    Statistics,
)

WORKER_THREAD_PREFIX: Final[str] = "tagmend-worker"


def effective_options(mode: CommandMode, options: NormalizationOptions) -> NormalizationOptions:
    """Return the pipeline options a mode actually runs with.

    ``fix`` always performs the full normalization, so ``update_encoding_only``
    is switched off for it; other modes keep the caller's options.
    """
    if mode is CommandMode.FIX and options.update_encoding_only:
        return replace(options, update_encoding_only=False)
    return options


class BatchCoordinator:
    """Run one command over a list of scanned files with a bounded worker pool."""

    def __init__(
        self,
        tag_store: TagStorePort,
        mode: CommandMode,
        options: NormalizationOptions,
        *,
        reporter: BatchReporter | None = None,
        source_root: Path | None = None,
    ) -> None:
        self.tag_store: TagStorePort = tag_store
        self.mode: CommandMode = mode
        self.options: NormalizationOptions = effective_options(mode, options)
        self.reporter: BatchReporter | None = reporter
        self.source_root: Path | None = source_root
        self.pipeline: NormalizationPipeline = NormalizationPipeline(self.options)

        self._lock: threading.Lock = threading.Lock()
        self._state: CoordinatorState = CoordinatorState.IDLE
        self._statistics: Statistics = Statistics()
        self._dispatch_index: int = 0
        self._total: int = 0
        self._handlers: dict[CommandMode, Callable[[ScannedFile, int], FileOutcome]] = {
            CommandMode.SCAN: self._read_only,
            CommandMode.CHECK: self._read_only,
            CommandMode.TEST: self._preview,
            CommandMode.FIX: self._normalize_and_write,
            CommandMode.TAG: self._normalize_and_write,
        }

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def statistics(self) -> Statistics:
        """Snapshot of the counters; safe to call from any thread."""
        with self._lock:
            return replace(self._statistics)

    def run(self, files: Sequence[ScannedFile]) -> BatchReport:
        """Process ``files`` and report statistics exactly once.

        Args:
            files: Scanned files in the order they should be dispatched.

        Returns:
            BatchReport: Final statistics and outcomes ordered by dispatch index.

        Raises:
            RuntimeError: If the coordinator has already run.
            ValueError: If ``thread_count`` is lower than one.
        """
        if self._state is not CoordinatorState.IDLE:
            raise RuntimeError(f"BatchCoordinator already used (state={self._state})")
        if self.options.thread_count < 1:
            raise ValueError(f"thread_count must be at least 1, got {self.options.thread_count}")

        started = time.perf_counter()
        self._total = len(files)
        self._statistics = Statistics(total=self._total)

        if not files:
            self._log(
                logging.WARNING,
                BatchEvent.BATCH_NO_FILES,
                "No supported audio files found [mode=%s]",
                self.mode,
                mode=self.mode.value,
                total=0,
                directory=self.source_root,
            )
            return self._finish([], started)

        self._log(
            logging.INFO,
            BatchEvent.BATCH_START,
            "Batch started [mode=%s, files=%d, threads=%d]",
            self.mode,
            self._total,
            self.options.thread_count,
            mode=self.mode.value,
            total=self._total,
            thread_count=self.options.thread_count,
            directory=self.source_root,
        )

        outcomes: list[FileOutcome] = []
        self._state = CoordinatorState.DISPATCHING
        with ThreadPoolExecutor(
            max_workers=self.options.thread_count,
            thread_name_prefix=WORKER_THREAD_PREFIX,
        ) as executor:
            futures = [executor.submit(self._run_job, scanned) for scanned in files]
            self._state = CoordinatorState.DRAINING
            for future in as_completed(futures):
                outcome = future.result()
                self._fold(outcome)
                outcomes.append(outcome)
                if self.reporter is not None:
                    self.reporter.report_file(outcome)

        return self._finish(outcomes, started)

    def _finish(self, outcomes: list[FileOutcome], started: float) -> BatchReport:
        self._state = CoordinatorState.REPORTING
        statistics = self.statistics
        if self._total:
            self._log(
                logging.INFO,
                BatchEvent.BATCH_COMPLETE,
                "Batch complete [mode=%s, success=%d, failed=%d, updated=%d]",
                self.mode,
                statistics.success,
                statistics.failed,
                statistics.tags_updated,
                mode=self.mode.value,
                duration_seconds=time.perf_counter() - started,
                directory=self.source_root,
                **statistics.as_dict(),
            )
        if self.reporter is not None:
            self.reporter.report_statistics(statistics)
        self._state = CoordinatorState.DONE
        outcomes.sort(key=lambda outcome: outcome.dispatch_index)
        return BatchReport(statistics=statistics, outcomes=tuple(outcomes))

    def _next_dispatch_index(self) -> int:
        with self._lock:
            self._dispatch_index += 1
            return self._dispatch_index

    def _run_job(self, scanned: ScannedFile) -> FileOutcome:
        index = self._next_dispatch_index()
        try:
            return self._handlers[self.mode](scanned, index)
        except (ReadError, WriteError) as exc:
            return self._failure(scanned, index, exc.reason, exc)
        except Exception as exc:  # isolate unexpected per-file failures
            error_message = str(exc) if str(exc) else type(exc).__name__
            return self._failure(scanned, index, error_message, exc)

    def _failure(
        self,
        scanned: ScannedFile,
        index: int,
        error_message: str,
        exc: Exception,
    ) -> FileOutcome:
        self._log(
            logging.ERROR,
            BatchEvent.FILE_ERROR,
            "Failed to process file #%d/%d [name=%s, error=%s]",
            index,
            self._total,
            scanned.relative_path,
            error_message,
            dispatch_index=index,
            total=self._total,
            source_path=scanned.path,
            source_root=self.source_root,
            error_message=error_message,
            error_type=type(exc).__name__,
        )
        return FileOutcome(
            scanned=scanned,
            mode=self.mode,
            dispatch_index=index,
            success=False,
            error_message=error_message,
        )

    def _read(self, scanned: ScannedFile) -> MediaRecord:
        record = self.tag_store.read(scanned.path)
        return record.with_fields(relative_path=scanned.relative_path)

    def _read_only(self, scanned: ScannedFile, index: int) -> FileOutcome:
        record = self._read(scanned)
        return FileOutcome(scanned=scanned, mode=self.mode, dispatch_index=index, success=True, record=record)

    def _preview(self, scanned: ScannedFile, index: int) -> FileOutcome:
        record = self._read(scanned)
        result = self.pipeline.run_for_path(record)
        return FileOutcome(
            scanned=scanned,
            mode=self.mode,
            dispatch_index=index,
            success=True,
            record=record,
            result=result,
        )

    def _target_path(self, scanned: ScannedFile) -> Path:
        if self.options.output_root is None:
            return scanned.path
        return self.options.output_root / scanned.relative_path

    def _normalize_and_write(self, scanned: ScannedFile, index: int) -> FileOutcome:
        record = self._read(scanned)
        result = self.pipeline.run_for_path(record)
        target = self._target_path(scanned)
        if target == scanned.path:
            self.tag_store.write(scanned.path, result.record)
        else:
            self.tag_store.write_to_copy(scanned.path, target, result.record)

        self._log(
            logging.DEBUG,
            BatchEvent.FILE_WRITTEN,
            "Wrote tags #%d/%d [source=%s, target=%s, changes=%d]",
            index,
            self._total,
            scanned.path,
            target,
            len(result.events),
            dispatch_index=index,
            total=self._total,
            source_path=scanned.path,
            source_root=self.source_root,
            target_path=target,
            output_root=self.options.output_root,
        )
        return FileOutcome(
            scanned=scanned,
            mode=self.mode,
            dispatch_index=index,
            success=True,
            record=record,
            result=result,
            written_path=target,
        )

    def _fold(self, outcome: FileOutcome) -> None:
        with self._lock:
            stats = self._statistics
            if not outcome.success:
                stats.failed += 1
                return
            stats.success += 1
            if not self.mode.writes or outcome.result is None:
                return

            result = outcome.result
            stats.tags_updated += 1
            stats.encoding_fixed += sum(
                1 for event in result.events if event.kind is ChangeKind.ENCODING_FIXED
            )
            if result.has(TagField.ALBUM, ChangeKind.FALLBACK_FILLED):
                stats.auto_albums += 1
            if result.has(TagField.TITLE, ChangeKind.ZERO_PADDED) or result.has(
                TagField.TITLE, ChangeKind.FALLBACK_FILLED
            ):
                stats.auto_titles += 1

    def _log(
        self,
        level: int,
        event: BatchEvent,
        message: str,
        *message_args: object,
        **context: Any,
    ) -> None:
        extra: dict[str, Any] = {"batch_event": event.value}
        for key, value in context.items():
            extra[key] = str(value) if isinstance(value, Path) else value
        logger.log(level, message, *message_args, extra=extra, stacklevel=2)


__all__ = ["BatchCoordinator", "WORKER_THREAD_PREFIX", "effective_options"]
