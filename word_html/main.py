"""Command-line entry point for the Word → HTML converter."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from word_html.config import (
    DEFAULT_CONVERTER_EXECUTABLE,
    DEFAULT_WRAPPER_CLASS,
    LIST_TYPE_PARITY,
    LIST_TYPE_STRATEGIES,
    ConversionOptions,
)
from word_html.converter import convert_to_html
from word_html.errors import ConversionError
from word_html.utils.logger import get_logger, set_level

LOGGER = get_logger(__name__)


def positive_float(value: str) -> float:
    """argparse type for strictly positive numbers of seconds."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero: {value!r}")
    return number



def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert .doc/.docx files into an embeddable HTML fragment")
    parser.add_argument("input", help="Path to the input .doc or .docx file")
    parser.add_argument("-o", "--output", help="File to write the fragment to (default: stdout)")
    parser.add_argument("--no-wrapper", action="store_true", help="Do not wrap the fragment in a container div")
    parser.add_argument(
        "--wrapper-class",
        default=DEFAULT_WRAPPER_CLASS,
        help="CSS class of the container div (default: %(default)s)",
    )
    parser.add_argument(
        "--list-types",
        choices=LIST_TYPE_STRATEGIES,
        default=LIST_TYPE_PARITY,
        help="How ordered/unordered lists are told apart (default: %(default)s)",
    )
    parser.add_argument(
        "--soffice",
        default=DEFAULT_CONVERTER_EXECUTABLE,
        help="Office executable used for legacy .doc files (default: %(default)s)",
    )
    parser.add_argument("--timeout", type=positive_float, help="Seconds to wait for the .doc converter")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
        help="Logging level (default: %(default)s)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the conversion and return a process exit status."""
    args = build_parser().parse_args(argv)
    set_level(args.log_level)

    options = ConversionOptions(
        wrapper_class=None if args.no_wrapper else args.wrapper_class,
        list_type_strategy=args.list_types,
        converter_executable=args.soffice,
        converter_timeout=args.timeout,
    )

    try:
        fragment = convert_to_html(Path(args.input), options)
    except ConversionError as exc:
        LOGGER.debug("Conversion failed", exc_info=exc)
        print(f"error: {exc.message}", file=sys.stderr)
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(fragment, encoding="utf-8")
        LOGGER.info("Wrote %s", output_path)
    else:
        sys.stdout.write(fragment)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
