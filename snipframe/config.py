"""Command line options."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

VERSION = "0.2.0"


@dataclass(frozen=True)
class Config:
    """User configuration taken from the command line."""

    instant: bool = False


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snipframe",
        description="A cross-platform desktop screenshot app",
    )
    parser.add_argument(
        "--instant",
        action="store_true",
        help="The first selection will be copied to the clipboard as soon "
        "as the left mouse button is released",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> Config:
    """Parse command line arguments into a :class:`Config`."""
    args = _parser().parse_args(argv)
    return Config(instant=args.instant)