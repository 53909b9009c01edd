"""Parse a JSON file and print its value tree: python -m jsonparsec FILE"""
import logging
import sys
from argparse import ArgumentParser
from typing import List, Optional

from .Json import DEFAULT_MAX_DEPTH, JsonConfig, loads
from .Parsec import ParseError
from .Pretty import pformat

logger = logging.getLogger(__name__)


def create_argument_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="jsonparsec",
        description="Parse a JSON document and print its value tree",
    )
    parser.add_argument("path", help="JSON file to parse")
    parser.add_argument("-o", "--output", help="Write the value tree here instead of stdout")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject truncated containers, trailing commas and leftover input",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Deepest container nesting allowed, 0 for no limit (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument("--trace", action="store_true", help="Log every grammar rule at DEBUG level")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def set_up_logging(log_level: str) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level, logging.WARNING))
    root_logger.handlers = []
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(handler)


def main(argv: Optional[List[str]] = None) -> int:
    args = create_argument_parser().parse_args(argv)
    set_up_logging("DEBUG" if args.trace else args.log_level)

    if args.max_depth < 0:
        print("ERROR: --max-depth must not be negative", file=sys.stderr)
        return 2
    config = JsonConfig(max_depth=args.max_depth or None, strict=args.strict, trace=args.trace)

    try:
        with open(args.path, encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        value = loads(text, config, source_name=args.path)
    except ParseError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    rendered = pformat(value)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(rendered + "\n")
        logger.info("wrote value tree to %s", args.output)
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
