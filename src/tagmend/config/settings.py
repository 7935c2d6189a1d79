"""Where: src/tagmend/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
"""

from __future__ import annotations

from tagmend.config.config import (
    OUTPUT_DIR_DEFAULT,
    THREAD_COUNT_DEFAULT,
    config as app_config,
)

_thread_count = getattr(app_config, "thread_count", THREAD_COUNT_DEFAULT)
DEFAULT_THREAD_COUNT: int = (
    _thread_count
    if isinstance(_thread_count, int) and not isinstance(_thread_count, bool) and _thread_count > 0
    else THREAD_COUNT_DEFAULT
)

_output_dir = getattr(app_config, "output_dir", OUTPUT_DIR_DEFAULT)
DEFAULT_OUTPUT_DIR: str = (
    _output_dir.strip() if isinstance(_output_dir, str) and _output_dir.strip() else OUTPUT_DIR_DEFAULT
)


__all__ = ["DEFAULT_THREAD_COUNT", "DEFAULT_OUTPUT_DIR"]
