"""Command line parsing.

Usage: ``termpad [+LINE] PATH[:LINE]``. A line given as a path suffix wins
over ``+LINE``. Lines are 1-based on the command line and 0-based inside.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

USAGE = "usage: termpad [--version] [+LINE] PATH[:LINE]"


class UsageError(Exception):
    """The command line could not be understood."""


@dataclass
class StartupArgs:
    path: Optional[str] = None
    line_index: int = 0
    show_version: bool = False
    show_help: bool = False


def _to_index(line: int) -> int:
    """1-based line number to 0-based index; anything below 1 is the first line."""
    return max(0, line - 1)


def split_line_suffix(arg: str) -> tuple[str, Optional[int]]:
    """Split 'path:N' into ('path', N); other arguments come back unchanged."""
    head, sep, tail = arg.rpartition(':')
    if not sep or not head:
        return arg, None
    try:
        return head, int(tail)
    except ValueError:
        return arg, None


def parse_args(argv: Sequence[str]) -> StartupArgs:
    """Parse arguments (without the program name).

    Raises:
        UsageError: on unknown options, a bad +LINE, or a missing or extra path
    """
    args = StartupArgs()
    flag_line: Optional[int] = None
    paths = []
    for arg in argv:
        if arg in ('--version', '-V'):
            args.show_version = True
        elif arg in ('--help', '-h'):
            args.show_help = True
        elif arg.startswith('+'):
            try:
                flag_line = int(arg[1:])
            except ValueError:
                raise UsageError(f"invalid line number: {arg}") from None
        elif arg.startswith('-') and arg != '-':
            raise UsageError(f"unknown option: {arg}")
        else:
            paths.append(arg)

    if args.show_version or args.show_help:
        return args
    if not paths:
        raise UsageError("missing file path")
    if len(paths) > 1:
        raise UsageError(f"only one file can be edited, got {len(paths)}")

    path, suffix_line = split_line_suffix(paths[0])
    args.path = path
    line = suffix_line if suffix_line is not None else flag_line
    args.line_index = _to_index(line) if line is not None else 0
    return args
