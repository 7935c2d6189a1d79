"""Rich console handler for structured batch events.

Where: platform/logging/handlers.py
What: Render ``batch_event`` log records with icons, colours and compact paths.
Why: Keep console output readable while file logs keep the raw message text.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class WhitePathRichHandler(RichHandler):
    """Custom Rich handler that displays file paths in white."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "batch.start": ("🚀", "cyan"),
        "batch.complete": ("✅", "green"),
        "batch.no_files": ("ℹ️", "yellow"),
        "file.written": ("💾", "magenta"),
        "file.error": ("⛔", "red"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        super().__init__(*args, **kwargs)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Render ``path`` relative to ``base`` when possible, keeping the last segments.

        Args:
            path: Absolute or relative path string.
            base: Optional root used to relativize ``path``.

        Returns:
            Text: Styled path with magenta separators and an ellipsis when truncated.
        """
        display_path = self._to_pure_path(path)
        if base:
            try:
                relative = display_path.relative_to(self._to_pure_path(base))
            except ValueError:
                relative = None
            if relative is not None and str(relative) not in {"", "."}:
                display_path = relative

        separator = "\\" if isinstance(display_path, PureWindowsPath) else "/"
        parts = [part for part in display_path.parts if part and part != display_path.anchor]
        truncated = len(parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            parts = parts[-self._PATH_SEGMENT_LIMIT:]
            rendered = separator.join(["…", *parts])
        else:
            rendered = display_path.anchor.rstrip("\\/") + (separator if display_path.anchor else "")
            rendered += separator.join(parts)

        text = Text()
        for char in rendered or ".":
            color = "magenta" if char in {"/", "\\", "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    def _render_batch_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured batch events with dedicated styling."""

        event = getattr(record, "batch_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        mode = getattr(record, "mode", None)
        if event == "batch.start":
            _ = body.append(f"Batch {mode} start" if mode else "Batch start")
            total = getattr(record, "total", None)
            threads = getattr(record, "thread_count", None)
            details = [
                label
                for label in (
                    f"files={total}" if isinstance(total, int) else "",
                    f"threads={threads}" if isinstance(threads, int) else "",
                )
                if label
            ]
            if details:
                _ = body.append(" [" + ", ".join(details) + "]")
        elif event == "batch.complete":
            _ = body.append("Batch complete")
            metrics: list[str] = []
            for key in ("success", "failed", "tags_updated"):
                value = getattr(record, key, None)
                if isinstance(value, int):
                    metrics.append(f"{key}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
            if metrics:
                _ = body.append(" [" + ", ".join(metrics) + "]")
        elif event == "batch.no_files":
            _ = body.append("No supported audio files")
        else:
            index = getattr(record, "dispatch_index", None)
            total = getattr(record, "total", None)
            if isinstance(index, int) and index > 0:
                _ = body.append(f"[{index}/{total}] " if isinstance(total, int) else f"[{index}] ")
            _ = body.append("Wrote " if event == "file.written" else "Failed ")
            source_path = getattr(record, "source_path", None)
            if source_path:
                _ = body.append_text(
                    self._format_path(str(source_path), base=getattr(record, "source_root", None))
                )
            target_path = getattr(record, "target_path", None)
            if event == "file.written" and target_path and target_path != source_path:
                _ = body.append(" → ")
                _ = body.append_text(
                    self._format_path(str(target_path), base=getattr(record, "output_root", None))
                )
            error_message = getattr(record, "error_message", None)
            if event == "file.error" and error_message:
                _ = body.append(f" ({error_message})")

        directory = getattr(record, "directory", None)
        if event.startswith("batch.") and directory:
            _ = body.append(" @ ")
            _ = body.append_text(self._format_path(str(directory)))

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        batch_text = self._render_batch_message(record)
        if batch_text is not None:
            return batch_text
        return super().render_message(record, message)


__all__ = ["WhitePathRichHandler"]
