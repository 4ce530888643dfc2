"""Command-line helper for converting single strings to and from game text."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from . import __version__
from .bank_config import load_font_bank_config
from .banks import get_font_bank
from .errors import GameTextError
from .font_bank import FontBank
from .jamo import JamoSequenceCollector
from .versions import available_versions

LOGGER = logging.getLogger(__name__)

DEFAULT_VERSION = "jak1-v2"


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Return parsed command-line arguments for the game text CLI."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-t",
        "--text-version",
        dest="text_version",
        default=DEFAULT_VERSION,
        help=f"Font bank to use ({', '.join(available_versions())})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Load the font bank from this TOML table file instead of a built-in one",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity for the helper.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("versions", help="List the supported text versions")

    encode_parser = commands.add_parser(
        "encode", help="Convert readable text into game bytes (printed as hex)"
    )
    encode_parser.add_argument("text", help="Readable text, escape codes allowed")
    encode_parser.add_argument(
        "--raw",
        action="store_true",
        help="Take the text literally instead of resolving escape codes",
    )

    decode_parser = commands.add_parser(
        "decode", help="Convert hex-encoded game bytes into readable text"
    )
    decode_parser.add_argument("hex", help="Game bytes as hex, spaces allowed")
    decode_parser.add_argument(
        "--korean",
        action="store_true",
        help="Re-tag the Korean jamo span protocol before decoding",
    )
    decode_parser.add_argument(
        "--jamo-report",
        action="store_true",
        help="Log the jamo sequences seen while decoding at INFO level (implies --korean)",
    )
    return parser.parse_args(argv)


def format_payload(payload: bytes) -> str:
    if not payload:
        return "<empty>"
    return " ".join(f"{byte:02x}" for byte in payload)


def _select_bank(args: argparse.Namespace) -> FontBank:
    if args.config is not None:
        config_path: Path = args.config
        if not config_path.exists():
            raise SystemExit(f"font bank file not found: {config_path}")
        return load_font_bank_config(config_path)
    return get_font_bank(args.text_version)


def main(argv: List[str] | None = None) -> int:
    """Entry point for the ``gametext`` command."""

    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.command == "versions":
        print("\n".join(available_versions()))
        return 0

    try:
        bank = _select_bank(args)
        LOGGER.info("Using %s font bank", bank.name)
        if args.command == "encode":
            print(format_payload(bank.encode(args.text, not args.raw)))
            return 0

        try:
            payload = bytes.fromhex(args.hex)
        except ValueError as exc:
            raise SystemExit(f"invalid hex payload: {exc}") from exc
        collector = JamoSequenceCollector() if args.jamo_report else None
        print(bank.decode(payload, args.korean or args.jamo_report, collector=collector))
        if collector is not None:
            collector.log_report(LOGGER)
    except GameTextError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
