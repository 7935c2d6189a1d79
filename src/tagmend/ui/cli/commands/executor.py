"""Where: src/tagmend/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Reuse scanning, coordination and presentation helpers across commands.
"""

from abc import ABC, abstractmethod

from rich.console import Console

from tagmend.features.normalization import (
    BatchReport,
    DirectoryScanner,
    MutagenTagStore,
)
from tagmend.features.normalization.usecases import DirectoryWalkerPort, TagStorePort
from tagmend.ui.cli.args.options import RunArgs


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: RunArgs
    tag_store: TagStorePort
    scanner: DirectoryWalkerPort
    console: Console

    def __init__(
        self,
        args: RunArgs,
        *,
        tag_store: TagStorePort | None = None,
        scanner: DirectoryWalkerPort | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            tag_store: Tag store override (tests).
            scanner: Directory walker override (tests).
            console: Console used for per-file output.
        """
        self.args = args
        self.tag_store = tag_store or MutagenTagStore()
        self.scanner = scanner or DirectoryScanner()
        self.console = console or Console()

    @abstractmethod
    def execute(self) -> BatchReport:
        """Execute the command.

        Returns:
            BatchReport: Statistics and per-file outcomes.
        """
        pass
