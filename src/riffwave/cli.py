"""
Command-line interface for riffwave.

`riffwave print FILE` decodes the WAVE headers of FILE and prints a summary;
`riffwave raw FILE` counts the payload bytes that follow the data chunk
header.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .config import AppConfig, load_config
from .decoder import RiffWaveReader
from .errors import RiffWaveError
from .logging_utils import create_event_logger
from .report import document_summary, format_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_INPUT_ERROR = 2
EXIT_DECODE_ERROR = 3


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        metavar="PATH",
        help="Path to an optional configuration file (riffwave.toml).",
    )
    common.add_argument(
        "--json-log",
        dest="json_log",
        action="store_true",
        default=None,
        help="Emit logs as JSON lines.",
    )
    common.add_argument(
        "--buffer-size",
        dest="buffer_size",
        type=int,
        metavar="BYTES",
        help="Read buffer used when opening the input (default 8192).",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (repeatable).",
    )
    common.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-essential log output.",
    )
    return common


def create_parser() -> argparse.ArgumentParser:
    """Create the top-level argument parser for the CLI."""
    common = _common_options()
    parser = argparse.ArgumentParser(
        prog="riffwave",
        description="Inspect RIFF/WAVE files: print their headers or count payload bytes.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"riffwave {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    print_parser = subparsers.add_parser(
        "print",
        parents=[common],
        help="Print a structured summary of the file's chunks.",
    )
    print_parser.add_argument("input", metavar="INPUT", help="WAVE file to inspect.")
    print_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the summary as JSON instead of the text report.",
    )

    raw_parser = subparsers.add_parser(
        "raw",
        parents=[common],
        help="Count the raw payload bytes after the data chunk header.",
    )
    raw_parser.add_argument("input", metavar="INPUT", help="WAVE file to read.")
    raw_parser.add_argument(
        "--block-size",
        dest="block_size",
        type=int,
        metavar="BYTES",
        help="Payload read size (default 65536).",
    )
    raw_parser.add_argument(
        "--clamp",
        action="store_true",
        default=None,
        help="Stop at the declared data size instead of the end of the file.",
    )
    return parser


def _configure_logging(verbosity: int, quiet: bool) -> None:
    """Configure root logger based on verbosity flags."""
    if quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
        if verbosity == 1:
            level = logging.INFO
        elif verbosity >= 2:
            level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger.debug("Logging configured (level=%s)", logging.getLevelName(level))


def _fail(message: str, code: int) -> int:
    print(f"riffwave: {message}", file=sys.stderr)
    return code


def _run_print(reader: RiffWaveReader, args: argparse.Namespace) -> None:
    if args.json:
        print(json.dumps(document_summary(reader), indent=2))
    else:
        print(format_report(reader))


def _run_raw(reader: RiffWaveReader, config: AppConfig) -> None:
    total = 0
    for block in reader.iter_data(config.block_size, clamp=config.clamp_payload):
        total += len(block)
    logger.info(
        "Payload read | bytes=%s | declared=%s | clamp=%s",
        total,
        reader.data_chunk.data_size,
        config.clamp_payload,
    )
    print(total)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point invoked by `python -m riffwave` or console scripts."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_INPUT_ERROR

    _configure_logging(args.verbose, args.quiet)
    try:
        config = load_config(args)
    except (ValueError, OSError) as exc:
        return _fail(f"invalid configuration - {exc}", EXIT_INPUT_ERROR)
    logger.debug("Loaded configuration: %s", config)

    event_logger = create_event_logger(logging.getLogger("riffwave.events"), config.log_format)

    try:
        with RiffWaveReader.open(
            args.input,
            buffer_size=config.buffer_size,
            event_logger=event_logger,
        ) as reader:
            if args.command == "print":
                _run_print(reader, args)
            else:
                _run_raw(reader, config)
    except RiffWaveError as exc:
        logger.error("Failed to decode '%s': %s", args.input, exc)
        return _fail(str(exc), EXIT_DECODE_ERROR)
    except OSError as exc:
        logger.error("Failed to read '%s': %s", args.input, exc)
        return _fail(f"cannot read '{args.input}': {exc}", EXIT_INPUT_ERROR)
    except Exception as exc:  # pragma: no cover - last-resort guard for the CLI
        logger.exception("Unexpected error while processing '%s': %s", args.input, exc)
        return EXIT_UNEXPECTED

    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - allows `python cli.py`
    raise SystemExit(main())
