"""
Command line entry point.

Dumps a YAML or JSON document the way the dumpy filter would:

    python -m dumpy data.yaml --depth 2
    cat data.json | python -m dumpy --html
"""

import argparse
import sys
from pprint import pformat
from typing import Optional, Sequence

import yaml
from loguru import logger

from .config import Config
from .encoder import YamlEncoder
from .filters import Dumpy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dumpy",
        description="Dump a YAML/JSON document as a depth-limited, type-tagged YAML tree",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Document to dump (default: stdin)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=Config.MAX_DEPTH,
        help=f"Recursion depth budget (default: {Config.MAX_DEPTH})",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Escape output and wrap it in <pre> for embedding in a page",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the unbounded pprint-style dump instead",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug messages (accessor failures, fallbacks) to stderr",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if args.verbose else "WARNING",
    )

    try:
        Config.validate()
        if args.file == "-":
            document = yaml.safe_load(sys.stdin)
        else:
            with open(args.file, encoding="utf-8") as f:
                document = yaml.safe_load(f)
    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.error(f"Cannot load {args.file}: {e}")
        return 1

    dumpy = Dumpy(encoder=YamlEncoder(html=args.html))

    if args.raw:
        output = dumpy.pre_dump(document) if args.html else pformat(document)
    elif args.html:
        output = dumpy.pre_yaml_dump(document, args.depth)
    else:
        output = dumpy.yaml_dump(document, args.depth)

    print(output)
    return 0
