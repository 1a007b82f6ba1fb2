"""Command-line interface for the price sampler."""
from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys

from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .services import Sampler

logger = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="price-sampler",
        description="Poll price APIs and append observations to per-asset CSV files",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    run_parser = sub.add_parser("run", help="Continuous sampling loop")
    run_parser.add_argument(
        "interval",
        nargs="?",
        type=_positive_float,
        default=None,
        help="Seconds between ticks (overrides config)",
    )
    run_parser.add_argument(
        "--ticks",
        type=_positive_int,
        default=None,
        help="Stop after this many ticks (default: run forever)",
    )

    sub.add_parser("once", help="Sample every source once and exit")
    sub.add_parser("sources", help="List configured sources")

    return parser


def _install_stop_handlers(stop: asyncio.Event) -> None:
    """Set ``stop`` on SIGINT/SIGTERM so the loop exits after the current tick."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Windows event loops do not support signal handlers
            logger.debug("Signal handler for %s not installed", sig)


def _print_sources(config: AppConfig) -> None:
    for source in config.sources:
        print(
            f"{source.name}\t{source.kind}\t{source.instrument}\t"
            f"{source.sink_path(config.sampler.output_dir)}"
        )


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the process exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "sources":
        _print_sources(config)
        return 0

    sampler = Sampler.from_config(config)

    if args.command == "once":
        result = await sampler.run_tick()
        return 0 if result.ok else 1

    if args.command == "run":
        if args.interval is not None:
            sampler = Sampler(
                sampler.registry,
                interval_seconds=args.interval,
                fatal_sink_errors=config.sampler.fatal_sink_errors,
            )
        stop = asyncio.Event()
        _install_stop_handlers(stop)
        await sampler.run(stop=stop, max_ticks=args.ticks)
        return 0

    build_parser().print_help()
    return 1


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
