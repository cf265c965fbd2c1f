"""Command-line driver: run a program file and print each normal form."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence, TextIO

from termcolor import colored

from stlc.common.errors import StlcError
from stlc.config import DEFAULT_RECURSION_LIMIT, Config
from stlc.core.pretty import pretty, pretty_type
from stlc.elab.program import Result, run_program

logger = logging.getLogger(__name__)

ERROR = "red"


def _paint(
    text: str, config: Config, color: str | None = None, bold: bool = False
) -> str:
    if not config.color:
        return text
    return colored(text, color, attrs=["bold"] if bold else None)


def render_error(err: StlcError, config: Config) -> str:
    """Describe ``err`` with the offending source line underlined."""

    lines = [_paint("error: ", config, ERROR, bold=True) + _headline(err)]
    if err.span is not None and err.source is not None:
        line_no, col = err.span.line_col(err.source)
        line_start = err.source.rfind("\n", 0, err.span.start) + 1
        line_end = err.source.find("\n", err.span.start)
        if line_end == -1:
            line_end = len(err.source)
        text = err.source[line_start:line_end]
        start = err.span.start - line_start
        end = min(err.span.end, line_end) - line_start
        highlighted = (
            text[:start]
            + _paint(text[start : max(end, start + 1)], config, ERROR, bold=True)
            + text[max(end, start + 1) :]
        )
        lines.append(f"  at line {line_no}, column {col}:")
        lines.append(f"  {highlighted}")
        lines.append("  " + " " * start + "^" * max(end - start, 1))
    return "\n".join(lines)


def _headline(err: StlcError) -> str:
    kind = type(err).__name__
    if err.rule:
        return f"{kind} in {err.rule}: {err.message}"
    return f"{kind}: {err.message}"


def format_result(result: Result, config: Config) -> str:
    normal = pretty(result.normal)
    if result.name is None:
        return f"(the {pretty_type(result.ty)} {normal})"
    if config.show_types:
        return f"{result.name} : {pretty_type(result.ty)}\n  = {normal}"
    return f"{result.name} = {normal}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stlc",
        description="Normalize a program in the simply typed lambda calculus.",
    )
    parser.add_argument("file", help="program file to elaborate and normalize")
    parser.add_argument(
        "--no-color", action="store_true", help="disable coloured error output"
    )
    parser.add_argument(
        "--no-types", action="store_true", help="omit the type line for definitions"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="logging level (default: $STLC_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--recursion-limit",
        type=int,
        default=DEFAULT_RECURSION_LIMIT,
        help="Python recursion limit used while evaluating",
    )
    return parser


def run(config: Config, path: str, out: TextIO, err: TextIO) -> int:
    try:
        with open(path, encoding="utf-8") as handle:
            source = handle.read()
    except OSError as exc:
        message = f"error: cannot read {path}: {exc.strerror}"
        print(_paint(message, config, ERROR), file=err)
        return 2

    sys.setrecursionlimit(max(sys.getrecursionlimit(), config.recursion_limit))
    logger.info("running %s", path)
    try:
        results = run_program(source)
    except StlcError as exc:
        print(render_error(exc, config), file=err)
        return 1

    for result in results:
        print(format_result(result, config), file=out)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = Config.from_args(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=config.level, format="%(levelname)s %(name)s: %(message)s"
    )
    return run(config, args.file, sys.stdout, sys.stderr)


__all__ = ["main", "run", "render_error", "format_result", "build_parser"]
