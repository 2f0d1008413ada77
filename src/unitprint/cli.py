"""unitprint CLI: canonicalize, encode and summarize compilation records."""

import argparse
import logging
import os
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional

from pydantic import ValidationError


def _configure_logging(quiet: bool) -> None:
    """Configure root logging from UNITPRINT_LOG_LEVEL (default WARNING)."""
    level_name = os.getenv("UNITPRINT_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    if quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _write_text(text: str, output: Optional[Path]) -> None:
    if output is None:
        print(text)
    else:
        output.write_text(text + "\n", encoding="utf-8")


def _write_bytes(data: bytes, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
    else:
        output.write_bytes(data)


def main():
    """Main CLI entry point for unitprint commands."""
    try:
        unitprint_version = get_version("unitprint")
    except PackageNotFoundError:
        unitprint_version = "dev"

    parser = argparse.ArgumentParser(
        prog="unitprint",
        description="unitprint: canonical forms and fingerprint preimages for compilation records"
    )
    parser.add_argument("--version", action="version", version=f"unitprint {unitprint_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "record",
        type=Path,
        help="Path to a compilation record (JSON)"
    )
    parent_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write to this file instead of stdout"
    )
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "canonicalize",
        help="Print the canonical form of a record as JSON",
        parents=[parent_parser]
    )

    preimage_parser = subparsers.add_parser(
        "preimage",
        help="Write the fingerprint preimage bytes of a record",
        parents=[parent_parser]
    )
    preimage_parser.add_argument(
        "--canonicalize",
        action="store_true",
        help="Canonicalize the record before encoding"
    )
    preimage_parser.add_argument(
        "--hex",
        action="store_true",
        help="Print the preimage as hex text instead of raw bytes"
    )

    subparsers.add_parser(
        "summary",
        help="Print the index summary of a record as JSON",
        parents=[parent_parser]
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.quiet)

    from .api import (
        canonicalize,
        encode,
        find_key_conflicts,
        load_record,
        record_to_json,
        summary_to_json,
    )

    try:
        record = load_record(args.record.resolve())
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValidationError as e:
        print(f"Error: invalid compilation record {args.record}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "canonicalize":
        canonical = canonicalize(record)
        _write_text(record_to_json(canonical), args.output)
        if not args.quiet and args.output is not None:
            conflicts = find_key_conflicts(canonical)
            print(f"[OK] Canonical record written to {args.output}")
            if conflicts:
                print(f"  Key conflicts: {len(conflicts)}")
    elif args.command == "preimage":
        if args.canonicalize:
            record = canonicalize(record)
        data = encode(record)
        if args.hex:
            _write_text(data.hex(), args.output)
        else:
            _write_bytes(data, args.output)
        if not args.quiet and args.output is not None:
            print(f"[OK] Preimage ({len(data)} bytes) written to {args.output}")
    elif args.command == "summary":
        _write_text(summary_to_json(record), args.output)


if __name__ == "__main__":
    main()
