"""Command-line interface for include-order validation.

Reads a validation request (scope directory on the first line, one candidate
file name per following line) from a file or stdin and prints the verdict.

Exit codes:
    0: the order of filenames is correct
    1: the order of filenames is not correct
    2: the run was aborted by an error
"""

import argparse
import sys
from collections.abc import Sequence

import structlog

from orderguard.config import OrderGuardConfig, ScanConfig, load_config
from orderguard.engine import OrderValidatingEngine
from orderguard.errors import OrderGuardError
from orderguard.log_config import configure_logging

logger = structlog.get_logger(__name__)

EXIT_CORRECT = 0
EXIT_INCORRECT = 1
EXIT_ERROR = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="orderguard",
        description="Validate a header ordering against the dependencies declared in a directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Request on stdin
  printf 'include\\na.h\\nb.h\\n' | orderguard

  # Request from a file, scanning .hpp files
  orderguard --input request.txt --extension .hpp

  # Debug logging as JSON
  orderguard --input request.txt --debug --json-logs
        """,
    )

    parser.add_argument(
        "-i",
        "--input",
        type=argparse.FileType("r", encoding="utf-8"),
        default=None,
        help="Request file (default: stdin)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML file (default: built-in defaults)",
    )
    parser.add_argument(
        "--extension",
        type=str,
        default=None,
        help="Suffix of known files (overrides configuration, default: .h)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=LOG_LEVELS,
        default=None,
        help="Set logging level (overrides configuration, default: WARNING)",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug output (DEBUG level)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Render log events as JSON",
    )

    args = parser.parse_args(argv)

    if args.debug:
        args.log_level = "DEBUG"

    return args


def resolve_config(args: argparse.Namespace) -> OrderGuardConfig:
    """Load configuration and apply command-line overrides.

    Raises:
        OSError: If a configuration file was given but cannot be read
        ValueError: If the configuration or an override is invalid
    """
    config = load_config(args.config)
    updates = {}
    if args.extension is not None:
        updates["scan"] = ScanConfig(**{**config.scan.model_dump(), "extension": args.extension})
    if args.log_level is not None or args.json_logs:
        updates["logging"] = config.logging.model_copy(
            update={
                "level": args.log_level or config.logging.level,
                "json_logs": args.json_logs or config.logging.json_logs,
            },
        )
    return config.model_copy(update=updates)


def run(args: argparse.Namespace) -> int:
    """Run one validation and return the exit code.

    Args:
        args: Parsed command-line arguments
    """
    in_stream = args.input if args.input is not None else sys.stdin
    try:
        try:
            config = resolve_config(args)
        except (OSError, ValueError) as e:
            configure_logging("WARNING")
            logger.exception("configuration_error", error=str(e))
            sys.stderr.write(f"orderguard: configuration error: {e}\n")
            return EXIT_ERROR

        configure_logging(config.logging.level, config.logging.json_logs)

        try:
            is_correct = OrderValidatingEngine(config).execute(in_stream, sys.stdout)
        except OrderGuardError as e:
            logger.exception("validation_aborted", error=e.message)
            sys.stderr.write(f"orderguard: {e.message}\n")
            return EXIT_ERROR
        except (OSError, UnicodeDecodeError) as e:
            logger.exception("io_error", error=str(e))
            sys.stderr.write(f"orderguard: {e}\n")
            return EXIT_ERROR
    finally:
        if args.input is not None:
            args.input.close()

    return EXIT_CORRECT if is_correct else EXIT_INCORRECT


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point: parse arguments, run, exit with the result code."""
    args = parse_args(argv)
    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
