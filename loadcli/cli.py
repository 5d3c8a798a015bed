"""Command line entry point for loadcli."""
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from loadcli.benchmark import (
    BenchmarkError,
    BenchmarkRunner,
    BenchmarkSettings,
    InvalidSettingsError,
    RemainderPolicy,
    ReportPrinter,
)
from loadcli.const import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    EXIT_BENCHMARK_FAILED,
    EXIT_OK,
    MAX_CONNECTIONS,
    MIN_CONNECTIONS,
)
from loadcli.shared.config import Config
from loadcli.shared.logging import LoggingManager


def connection_count(value: str) -> int:
    """argparse type for --connections."""
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid connection count: {value!r}")
    if not MIN_CONNECTIONS <= count <= MAX_CONNECTIONS:
        raise argparse.ArgumentTypeError(
            f"connections must be between {MIN_CONNECTIONS} and {MAX_CONNECTIONS}, got {count}"
        )
    return count


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {number}")
    return number


def positive_int(value: str) -> int:
    number = non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return number


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser; defaults come from the configuration."""
    parser = argparse.ArgumentParser(prog=APP_NAME, description=APP_DESCRIPTION)
    parser.add_argument("target_uri", nargs="?", default=config.target_uri,
                        help=f"URI to benchmark (default: {config.target_uri})")
    parser.add_argument("-c", "--connections", type=connection_count, default=config.connections,
                        help=f"number of concurrent logical connections (default: {config.connections})")
    parser.add_argument("-r", "--requests", type=non_negative_int, default=config.requests,
                        help=f"total number of requests across all connections (default: {config.requests})")
    parser.add_argument("-o", "--output-file", type=Path, default=None,
                        help="write per-status statistics to this CSV file")
    parser.add_argument("--detailed-output", type=Path, default=None,
                        help="write one CSV row per request to this file")
    parser.add_argument("--plot", type=Path, default=None,
                        help="write a latency graph (PNG) to this file")
    parser.add_argument("--batch-size", type=positive_int, default=config.progress_batch_size,
                        help="completed requests per progress notification")
    parser.add_argument("--remainder", choices=[policy.value for policy in RemainderPolicy],
                        default=config.remainder_policy,
                        help="drop requests that do not divide evenly across connections, or distribute them")
    parser.add_argument("--timeout", type=positive_float, default=config.request_timeout,
                        help="per-request timeout in seconds")
    parser.add_argument("--simulate", action="store_true",
                        help="use a simulated requester instead of the network")
    parser.add_argument("--no-progress", action="store_true",
                        help="do not show a progress bar")
    parser.add_argument("--log-level", default=config.log_level,
                        help="logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def settings_from_args(args: argparse.Namespace) -> BenchmarkSettings:
    """
    Build validated benchmark settings from parsed arguments.

    Raises:
        InvalidSettingsError: If the resulting settings are rejected.
    """
    try:
        remainder_policy = RemainderPolicy(args.remainder)
    except ValueError:
        raise InvalidSettingsError(f"unknown remainder policy: {args.remainder!r}")

    # Defaults from the configuration bypass the argparse type checks.
    if not MIN_CONNECTIONS <= args.connections <= MAX_CONNECTIONS:
        raise InvalidSettingsError(
            f"connections must be between {MIN_CONNECTIONS} and {MAX_CONNECTIONS}, got {args.connections}"
        )
    if args.timeout <= 0:
        raise InvalidSettingsError(f"timeout must be greater than 0, got {args.timeout}")

    settings = BenchmarkSettings(
        connection_count=args.connections,
        total_requests=args.requests,
        target=args.target_uri,
        batch_size=args.batch_size,
        remainder_policy=remainder_policy,
        request_timeout=args.timeout,
    )
    settings.validate()
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    config = Config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    LoggingManager.setup_logging(args.log_level, config.library_log_levels)

    try:
        settings = settings_from_args(args)
    except InvalidSettingsError as e:
        parser.error(str(e))

    console = Console()
    runner = BenchmarkRunner(
        settings,
        config=config,
        output_file=args.output_file,
        detailed_output=args.detailed_output,
        plot_file=args.plot,
        simulate=args.simulate,
        show_progress=not args.no_progress,
        console=console,
    )
    try:
        runner.run()
    except BenchmarkError as e:
        ReportPrinter(console).print_error(str(e))
        return EXIT_BENCHMARK_FAILED
    return EXIT_OK
