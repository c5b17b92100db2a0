"""Built-in functions for the callisp runtime environment.

This module defines arithmetic, comparison, list processing, predicates,
evaluation and I/O builtins, and the registration table exposing them to
Lisp code. Every builtin takes the calling environment and the list of
already-evaluated arguments.
"""
from __future__ import annotations

import logging
import math
import sys
from pathlib import Path

from callisp import LispValue
from callisp.config import get_use_path
from callisp.errors import CallispDivisionByZero, CallispIOError, CallispTypeError
from callisp.evaluation.evaluator import evaluate
from callisp.printer import to_lisp_string
from callisp.reader.parser import read
from callisp.runtime_context import get_input, get_output
from callisp.types import Builtin, Environment, Symbol, Unspecified, is_number, type_name

logger = logging.getLogger(__name__)


def _numbers(name: str, expr: list[LispValue]) -> list[float]:
    for x in expr:
        if not is_number(x):
            raise CallispTypeError(f"All arguments to {name} must be numbers, got {to_lisp_string(x)}")
    return expr


def _list_arg(name: str, x: LispValue) -> list[LispValue]:
    if not isinstance(x, list):
        raise CallispTypeError(f"{name} expects a list, got {type_name(x)}")
    return x


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, expr: list[LispValue]) -> float:
    """Return the sum of all arguments; 0 with no arguments."""
    return sum(_numbers("+", expr), 0.0)


def sub(env: Environment, expr: list[LispValue]) -> float:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    nums = _numbers("-", expr)
    if len(nums) == 1:
        return -nums[0]
    result = nums[0]
    for x in nums[1:]:
        result -= x
    return result


def mul(env: Environment, expr: list[LispValue]) -> float:
    """Return the product of all arguments; 1 with no arguments."""
    result = 1.0
    for x in _numbers("*", expr):
        result *= x
    return result


def div(env: Environment, expr: list[LispValue]) -> float:
    """Divide left-to-right; with one arg returns the reciprocal."""
    nums = _numbers("/", expr)
    if len(nums) == 1:
        dividend, divisors = 1.0, nums
    else:
        dividend, divisors = nums[0], nums[1:]
    for x in divisors:
        if x == 0:
            raise CallispDivisionByZero("Division by zero")
        dividend /= x
    return dividend


# -------------------------------
# Comparison
# -------------------------------
def lt(env: Environment, expr: list[LispValue]) -> bool:
    """Chainable less-than: true if a0 < a1 < a2 ... holds for all pairs."""
    nums = _numbers("<", expr)
    return all(a < b for a, b in zip(nums, nums[1:]))


def lte(env: Environment, expr: list[LispValue]) -> bool:
    nums = _numbers("<=", expr)
    return all(a <= b for a, b in zip(nums, nums[1:]))


def gt(env: Environment, expr: list[LispValue]) -> bool:
    nums = _numbers(">", expr)
    return all(a > b for a, b in zip(nums, nums[1:]))


def gte(env: Environment, expr: list[LispValue]) -> bool:
    nums = _numbers(">=", expr)
    return all(a >= b for a, b in zip(nums, nums[1:]))


# -------------------------------
# Equality and predicates
# -------------------------------
def is_equal(a: LispValue, b: LispValue) -> bool:
    """Deep equality: lists element-wise, everything else by value within one variant."""
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    # different variants are never equal
    if type(a) is not type(b):
        return False
    return a == b


def equals(env: Environment, expr: list[LispValue]) -> bool:
    """True if all arguments are structurally equal (or zero/one arg)."""
    if len(expr) <= 1:
        return True
    first = expr[0]
    return all(is_equal(first, other) for other in expr[1:])


def is_list(env: Environment, expr: list[LispValue]) -> bool:
    return isinstance(expr[0], list)


def is_empty(env: Environment, expr: list[LispValue]) -> bool:
    return len(_list_arg("empty?", expr[0])) == 0


def count(env: Environment, expr: list[LispValue]) -> float:
    return float(len(_list_arg("count", expr[0])))


def list_builtin(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    """Construct a new list from the provided arguments."""
    return list(expr)


def type_of(env: Environment, expr: list[LispValue]) -> Symbol:
    """(type x) -> symbol naming the variant of x"""
    return Symbol(type_name(expr[0]))


# -------------------------------
# Evaluation
# -------------------------------
def eval_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """Evaluate the argument value as an expression in the calling environment."""
    return evaluate(expr[0], env)


def resolve_use_path(name: str) -> Path:
    """Find `name` relative to the current directory, then along CALLISP_PATH."""
    path = Path(name)
    if path.is_absolute() or path.is_file():
        return path
    for root in get_use_path():
        candidate = root / path
        if candidate.is_file():
            return candidate
    return path


def use(env: Environment, expr: list[LispValue]) -> LispValue:
    """(use path) -> evaluate every form of the file in the calling environment.

    Returns the value of the last form, or Unspecified for an empty file. A
    failing form aborts the rest of the file.
    """
    target = expr[0]
    if not isinstance(target, Symbol):
        raise CallispTypeError(f"use expects a symbol naming a file, got {type_name(target)}")
    path = resolve_use_path(target.id)
    try:
        code = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CallispIOError(f"Cannot read {path}: {e}") from e

    logger.debug("use: evaluating %s", path)
    result: LispValue = Unspecified
    for form in read(code):
        result = evaluate(form, env)
    return result


# -------------------------------
# I/O and process
# -------------------------------
def putstr(env: Environment, expr: list[LispValue]) -> LispValue:
    """Write the printed argument followed by a newline; returns Unspecified."""
    out = get_output()
    out.write(to_lisp_string(expr[0]) + "\n")
    out.flush()
    return Unspecified


def readline_builtin(env: Environment, expr: list[LispValue]) -> Symbol:
    """Block for one line of input; returns it as a symbol without the line ending.

    At end of input the empty symbol is returned.
    """
    try:
        line = get_input().readline()
    except OSError as e:
        raise CallispIOError(f"Cannot read input: {e}") from e
    return Symbol(line.rstrip("\r\n"))


def exit_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """(exit) or (exit code): terminate the process."""
    code = 0
    if expr:
        status = _numbers("exit", expr)[0]
        if not math.isfinite(status):
            raise CallispTypeError(f"exit status must be a finite number, got {to_lisp_string(status)}")
        code = int(status)
    logger.debug("exit with status %d", code)
    sys.exit(code)


BUILTINS: dict[str, tuple] = {
    # name: (function, min_args, max_args)
    "+": (add, 0, None),
    "-": (sub, 1, None),
    "*": (mul, 0, None),
    "/": (div, 1, None),
    ">": (gt, 0, None),
    ">=": (gte, 0, None),
    "<": (lt, 0, None),
    "<=": (lte, 0, None),
    "equal?": (equals, 0, None),
    "list": (list_builtin, 0, None),
    "list?": (is_list, 1, 1),
    "empty?": (is_empty, 1, 1),
    "count": (count, 1, 1),
    "type": (type_of, 1, 1),
    "eval": (eval_builtin, 1, 1),
    "use": (use, 1, 1),
    "putstr": (putstr, 1, 1),
    "readline": (readline_builtin, 0, 0),
    "exit": (exit_builtin, 0, 1),
}


def register(env: Environment) -> None:
    """Register all builtin functions and constants into the given environment."""
    env.update(
        {
            Symbol(name): Builtin(name, fn, min_args, max_args)
            for name, (fn, min_args, max_args) in BUILTINS.items()
        }
    )
    env.define(Symbol("true"), True)
    env.define(Symbol("false"), False)
