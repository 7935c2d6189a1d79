"""Command line interface for tagmend."""

import sys
from typing import final

from tagmend.features.normalization import DirectoryScanError
from tagmend.platform.logging import logger
from tagmend.ui.cli.args import ArgumentParser
from tagmend.ui.cli.args.options import CLIArgs
from tagmend.ui.cli.commands import BatchCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)
            report = BatchCommand(args).execute()
            if report.failures:
                sys.exit(1)
            return

        except DirectoryScanError as e:
            logger.error("%s", e)
            sys.exit(1)
        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Note that underlying
        command processing may call ``sys.exit(...)`` on errors, so this
        return is only reached when processing completes successfully.
    """
    CommandProcessor.process_command()
    return 0
