"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from tagmend.config.config import Config
from tagmend.config.settings import DEFAULT_OUTPUT_DIR, DEFAULT_THREAD_COUNT
from tagmend.features.normalization import CommandMode
from tagmend.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from tagmend.ui.cli.args.options import CLIArgs, RunArgs

_COMMAND_HELP: dict[CommandMode, str] = {
    CommandMode.SCAN: "Show the current tags of every audio file",
    CommandMode.CHECK: "List files with their title, artist and album",
    CommandMode.TEST: "Preview normalization without writing anything",
    CommandMode.FIX: "Repair encodings, clean and fill tags, then write",
    CommandMode.TAG: "Repair tag encodings (optionally full normalization), then write",
}


def _thread_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid thread count: {value!r}") from exc
    if count < 1:
        raise argparse.ArgumentTypeError(f"thread count must be at least 1, got {count}")
    return count


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="tagmend",
            description="tagmend - repair garbled encodings and fill missing audio tags.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)
        for mode in CommandMode:
            subparser = subparsers.add_parser(mode.value, help=_COMMAND_HELP[mode])
            ArgumentParser._configure_common(subparser, threads=mode is not CommandMode.CHECK)

        test_parser = subparsers.choices[CommandMode.TEST.value]
        ArgumentParser._configure_force(test_parser)
        _ = test_parser.add_argument(
            "-u",
            "--update",
            dest="update_encoding_only",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Only repair encodings (default: on)",
        )

        fix_parser = subparsers.choices[CommandMode.FIX.value]
        ArgumentParser._configure_force(fix_parser)
        ArgumentParser._configure_outdir(fix_parser)
        _ = fix_parser.add_argument(
            "-u",
            "--update",
            dest="in_place",
            action="store_true",
            help="Update the original files instead of writing to the output directory",
        )

        tag_parser = subparsers.choices[CommandMode.TAG.value]
        ArgumentParser._configure_force(tag_parser)
        ArgumentParser._configure_outdir(tag_parser)
        _ = tag_parser.add_argument(
            "--in-place",
            dest="in_place",
            action="store_true",
            help="Update the original files instead of writing to the output directory",
        )
        _ = tag_parser.add_argument(
            "-u",
            "--update",
            dest="update_encoding_only",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Only repair encodings (default: on)",
        )

        return parser

    @staticmethod
    def _configure_common(parser: argparse.ArgumentParser, *, threads: bool) -> None:
        """Apply the arguments every subcommand accepts."""

        _ = parser.add_argument(
            "music_path",
            type=str,
            help="Directory to scan recursively for audio files",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )
        if threads:
            _ = parser.add_argument(
                "-n",
                "--threads",
                type=_thread_count,
                default=DEFAULT_THREAD_COUNT,
                help=f"Number of worker threads (default: {DEFAULT_THREAD_COUNT})",
            )

    @staticmethod
    def _configure_force(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Derive tags from the filename and directory name",
        )
        _ = parser.add_argument(
            "-a",
            "--all",
            dest="force_all",
            action="store_true",
            help="With --force, overwrite every existing tag",
        )

    @staticmethod
    def _configure_outdir(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "-o",
            "--outdir",
            type=str,
            default=DEFAULT_OUTPUT_DIR,
            help=f"Output directory mirroring the source tree (default: {DEFAULT_OUTPUT_DIR})",
            metavar="OUTPUT_DIR",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            RunArgs: Processed command line arguments.

        Raises:
            SystemExit: If the path does not exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        return ArgumentParser._process_run(parsed_args)

    @staticmethod
    def _process_run(parsed_args: argparse.Namespace) -> RunArgs:
        mode = CommandMode(parsed_args.command)
        music_path = Path(parsed_args.music_path)
        if not music_path.exists():
            logger.error("Music path does not exist: %s", music_path)
            sys.exit(1)

        output_root: Path | None = None
        if mode.writes and not parsed_args.in_place:
            output_root = Path(parsed_args.outdir)

        return RunArgs(
            command=mode,
            music_path=music_path,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            thread_count=getattr(parsed_args, "threads", DEFAULT_THREAD_COUNT),
            force=getattr(parsed_args, "force", False),
            force_all=getattr(parsed_args, "force_all", False),
            update_encoding_only=getattr(parsed_args, "update_encoding_only", False),
            output_root=output_root,
        )
