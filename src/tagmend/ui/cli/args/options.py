"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import final

from tagmend.features.normalization import CommandMode, NormalizationOptions


@final
@dataclass(frozen=True, slots=True)
class RunArgs:
    """Command line arguments shared by the ``scan``/``check``/``test``/``fix``/``tag`` subcommands."""

    command: CommandMode
    music_path: Path
    verbose: bool
    quiet: bool
    thread_count: int
    force: bool = False
    force_all: bool = False
    update_encoding_only: bool = False
    output_root: Path | None = None

    def to_options(self) -> NormalizationOptions:
        """Convert parsed flags into pipeline and coordinator options."""
        return NormalizationOptions(
            force=self.force,
            force_all=self.force_all,
            update_encoding_only=self.update_encoding_only,
            output_root=self.output_root,
            thread_count=self.thread_count,
        )


CLIArgs = RunArgs

__all__ = ["CLIArgs", "RunArgs"]
