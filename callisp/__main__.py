"""Command line: run a file, evaluate an expression, or start the REPL."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from callisp import __version__
from callisp.config import get_log_level, get_recursion_limit
from callisp.errors import CallispError, CallispSyntaxError
from callisp.interpreter import Interpreter
from callisp.log_support import setup_loggers
from callisp.printer import to_lisp_string
from callisp.reader.parser import read
from callisp.types.unspecified import Unspecified

logger = logging.getLogger("callisp.repl")

PROMPT = "callisp> "
CONTINUATION_PROMPT = "...      "


def needs_more_input(source: str) -> bool:
    """True when `source` ends inside an unfinished form."""
    try:
        for _ in read(source):
            pass
    except CallispSyntaxError as e:
        return e.incomplete
    return False


def report(e: BaseException) -> None:
    print(f"error: {e}", file=sys.stderr)
    logger.debug("evaluation failed", exc_info=e)


def eval_and_print(interp: Interpreter, source: str) -> bool:
    """Evaluate and print each top-level form; returns False if one failed."""
    try:
        for result in interp.eval_iter(source):
            if result is not Unspecified:
                print(to_lisp_string(result))
    except (CallispError, RecursionError) as e:
        report(e)
        return False
    return True


def repl(interp: Interpreter) -> None:
    try:
        import readline  # noqa: F401  (line editing and history for input())
    except ImportError:
        logger.debug("readline unavailable, line editing disabled")

    source = ""
    while True:
        try:
            line = input(CONTINUATION_PROMPT if source else PROMPT)
        except EOFError:
            print()
            return
        except KeyboardInterrupt:
            print()
            source = ""
            continue
        source += line + "\n"
        if needs_more_input(source):
            continue
        eval_and_print(interp, source)
        source = ""


def run_file(interp: Interpreter, path: Path) -> int:
    try:
        interp.load(path)
    except (OSError, CallispError, RecursionError) as e:
        report(e)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="callisp", description="callisp interpreter")
    parser.add_argument("file", type=Path, nargs="?", help="source file to run (starts the REPL if omitted)")
    parser.add_argument("-e", "--eval", dest="code", help="evaluate CODE and print each result")
    parser.add_argument("--log-file", type=Path, help="also write debug logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    setup_loggers(get_log_level(), args.log_file)
    limit = get_recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)

    try:
        interp = Interpreter()
    except (OSError, CallispError) as e:
        report(e)
        return 1

    if args.code is not None:
        return 0 if eval_and_print(interp, args.code) else 1
    if args.file is not None:
        return run_file(interp, args.file)
    repl(interp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
