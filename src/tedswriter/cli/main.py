"""Main CLI entry point for tedswriter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.show import encode_fields, load_fields, show_fields
from ..config import RESERVED_BYTE_MODES, EncoderConfig, FillPattern
from ..exceptions import TedsError


def main() -> int:
    """Main entry point for the tedswriter CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="tedswriter: IEEE 1451.4 TEDS record encoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tedswriter --show fields.json                 List the data to be written
  tedswriter --encode fields.json --size 128    Encode to a 128-byte buffer
  tedswriter --encode fields.json --decode      Encode and decode it back
        """,
    )

    parser.add_argument(
        "--show",
        metavar="FILE",
        type=str,
        help="Print the field values in a JSON field file",
    )

    parser.add_argument(
        "--encode",
        metavar="FILE",
        type=str,
        help="Encode a JSON field file and print the buffer as hex",
    )

    parser.add_argument("--size", type=int, default=32, help="Buffer size in bytes (default 32)")

    parser.add_argument(
        "--reserved",
        choices=RESERVED_BYTE_MODES,
        default="block",
        help="Checksum bytes: first byte of every 32-byte block, or only byte 0",
    )

    parser.add_argument(
        "--fill",
        type=lambda text: int(text, 16),
        default=0x00,
        metavar="HEX",
        help="Fill byte for unused space, in hex (default 00)",
    )

    parser.add_argument(
        "--decode", action="store_true", help="With --encode, print the decoded read-back"
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser.add_argument(
        "--version",
        action="version",
        version=f"tedswriter {__version__}",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    file_arg = args.encode or args.show
    if not file_arg:
        # If no command specified, show help
        parser.print_help()
        return 0

    file_path = Path(file_arg)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    try:
        config = EncoderConfig(
            buffer_size=args.size,
            reserved_bytes=args.reserved,
            fill=FillPattern(fill_byte=args.fill),
        )
        fields = load_fields(file_path)
        show_fields(fields)
        if args.encode:
            encode_fields(fields, config, decode=args.decode)
        return 0
    except (TedsError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
