"""Shared path utilities for configuration and log locations.

This module centralizes how the application discovers locations for
config and log files.

Policy (portable by default):
- Config: repository-root ``<repo_root>/config/config.toml``
- Logs: repository-root ``<repo_root>/logs`` unless overridden by
  ``TAGMEND_LOG_DIR``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


_ENV_LOG_DIR: Final[str] = "TAGMEND_LOG_DIR"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a location honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = (mapping.get(env_var) or "").strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    return default_factory().expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Detect the repository root by walking up parents.

    Looks for markers like ``pyproject.toml`` or ``.git``.

    Args:
        start: Starting path. Defaults to this file's location.

    Returns:
        Path: Detected repository root, or the current working directory
        if no marker is found.
    """
    here = (start or Path(__file__).resolve()).parent
    for candidate in [here, *here.parents]:
        if (candidate / "pyproject.toml").exists() or (candidate / ".git").exists():
            return candidate
    return Path.cwd()


def default_config_path() -> Path:
    """Get the default path to the main TOML config file.

    Portable layout: ``<repo_root>/config/config.toml``.
    """
    return (_detect_repo_root() / "config" / "config.toml").resolve()


def default_log_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the directory for log files, honoring ``TAGMEND_LOG_DIR``."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_LOG_DIR,
        default_factory=lambda: _detect_repo_root() / "logs",
    )


def default_log_file(env: Mapping[str, str] | None = None) -> Path:
    """Get the default log file path."""

    return (default_log_dir(env) / "tagmend.log").resolve()


__all__ = [
    "default_config_path",
    "default_log_dir",
    "default_log_file",
    "resolve_overridable_path",
]
