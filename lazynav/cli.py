"""Command-line front door for lazynav.

Parses options, runs the interactive navigator from the current directory,
and hands the final directory back to the shell.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .app import run
from .errors import TerminalInitError
from .logging_setup import LEVEL_NAMES, LOG_LEVEL_ENV, configure_logging

STDOUT_TARGET = "-"

EXIT_OK = 0
EXIT_TERMINAL = 1
EXIT_OUTPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazynav",
        description=(
            "Browse, mark, preview and delete files in a dual-pane terminal view. "
            "On exit the final directory is printed, or appended to FILE."
        ),
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="File to append the final directory to ('-' or omitted: stdout).",
    )
    parser.add_argument("-f", "--file", dest="output", metavar="FILE", default=None, help="Same as FILE.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LEVEL_NAMES,
        default=None,
        help=f"Log verbosity (default: ${LOG_LEVEL_ENV} or WARNING).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def output_target(args: argparse.Namespace) -> str:
    """Resolve the output destination; ``-f`` wins over the positional."""
    return args.output or args.file or STDOUT_TARGET


def emit_final_path(final_path: Path, target: str) -> None:
    """Print ``final_path`` or append it as one line to ``target``.

    Raises ``OSError`` when the output file cannot be written.
    """
    if target == STDOUT_TARGET:
        print(final_path)
        return
    with open(target, "a", encoding="utf-8") as handle:
        handle.write(f"{final_path}\n")


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and launch the navigator in the working directory."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        final_path = run(Path.cwd())
    except TerminalInitError as exc:
        print(f"lazynav: cannot initialize terminal: {exc}", file=sys.stderr)
        raise SystemExit(EXIT_TERMINAL) from exc

    try:
        emit_final_path(final_path, output_target(args))
    except OSError as exc:
        print(f"lazynav: cannot write output: {exc}", file=sys.stderr)
        raise SystemExit(EXIT_OUTPUT) from exc
    return EXIT_OK


__all__ = ["EXIT_OK", "EXIT_OUTPUT", "EXIT_TERMINAL", "build_parser", "emit_final_path", "main", "output_target"]
