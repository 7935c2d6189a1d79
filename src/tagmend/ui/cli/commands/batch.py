"""Where: src/tagmend/ui/cli/commands/batch.py
What: Execute scan/check/test/fix/tag runs for a directory root via the CLI.
Why: Bridge parsed arguments with the batch coordinator and console reporter.
"""

from typing import override

from tagmend.features.normalization import BatchCoordinator, BatchReport
from tagmend.ui.cli.commands.executor import CommandExecutor
from tagmend.ui.cli.display.report import ConsoleReporter


class BatchCommand(CommandExecutor):
    """Command scanning a directory and running one batch over it."""

    @override
    def execute(self) -> BatchReport:
        """Execute the batch command.

        Raises:
            DirectoryScanError: If the directory cannot be walked.
        """
        files = self.scanner.scan(self.args.music_path)
        reporter = ConsoleReporter(
            self.args.command,
            len(files),
            console=self.console,
            quiet=self.args.quiet,
        )
        if files:
            reporter.show_header(str(self.args.music_path))

        coordinator = BatchCoordinator(
            self.tag_store,
            self.args.command,
            self.args.to_options(),
            reporter=reporter,
            source_root=self.args.music_path,
        )
        return coordinator.run(files)
