"""Main CLI entry point for typeloop."""

from __future__ import annotations

import argparse
import logging
import sys

from .. import __version__
from .presets_cli import build_presets_parser
from .render_cli import build_plan_parser, build_render_parser


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="typeloop",
        description="Synthesize looping text animations",
    )
    parser.add_argument("--version", action="version", version=f"typeloop {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log output (-v info, -vv debug)",
    )
    subparsers = parser.add_subparsers(dest="command")
    build_plan_parser(subparsers)
    build_render_parser(subparsers)
    build_presets_parser(subparsers)
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0
    if args.command == "presets":
        if getattr(args, "func", None) is None:
            subparsers.choices["presets"].print_help()
            return 0
    return args.func(args)


def cli_entry() -> None:
    sys.exit(main())
