"""
Command line front end: decrypt a Samsung Pass export and write Chrome CSV.
"""

import argparse
import getpass
import logging
import os
import sys
from pathlib import Path

from . import config
from .converter import ConversionOptions, convert, is_likely_source_file
from .errors import ConversionError
from .utils import setup_logging

logger = logging.getLogger(__name__)


def spass_file_type(path):
    if not os.path.isfile(path):
        raise argparse.ArgumentTypeError(f"File does not exist: {path}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spass-converter",
        description="Decrypt a Samsung Pass export (.spass) and convert it to Chrome password CSV."
    )
    parser.add_argument("export_file_path", type=spass_file_type, help="Path to Samsung Pass export file")
    parser.add_argument("-p", "--password", help="Password for decryption (prompted for when omitted)")
    parser.add_argument("-o", "--output", help=f"Output CSV path (default: {config.DEFAULT_OUTPUT_FILENAME} in your Downloads folder)")
    parser.add_argument("--include-empty", action="store_true", help="Keep records whose fields are all empty")
    parser.add_argument("--stdout", action="store_true", help="Print the CSV instead of writing a file")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    if not is_likely_source_file(args.export_file_path):
        logger.warning(f"{args.export_file_path} does not have a {config.SPASS_FILE_EXTENSION} extension, trying anyway")

    password = args.password
    if password is None:
        password = getpass.getpass("Password: ")

    options = ConversionOptions(
        auto_persist=not args.stdout,
        filename_override=args.output,
        include_empty_fields=args.include_empty,
    )
    try:
        result = convert(Path(args.export_file_path), password, options)
    except ConversionError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.stdout:
        print(result.text)
    else:
        print(f"Exported {result.record_count} passwords to {result.saved_path}")
        print("Remember to delete this file after importing it!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
