"""Native functions exposed to Lisp code."""

from __future__ import annotations

from typing import Callable

from callisp import LispValue
from callisp.errors import CallispArityError
from callisp.types.environment import Environment

NativeFn = Callable[[Environment, list[LispValue]], LispValue]


class Builtin:
    """A named native operation with a declared arity.

    `max_args` of None means variadic.
    """

    __slots__ = ("name", "fn", "min_args", "max_args")

    def __init__(self, name: str, fn: NativeFn, min_args: int = 0, max_args: int | None = None):
        self.name = name
        self.fn = fn
        self.min_args = min_args
        self.max_args = max_args

    def check_arity(self, n: int) -> None:
        if n < self.min_args or (self.max_args is not None and n > self.max_args):
            if self.max_args is None:
                expected = f"at least {self.min_args}"
            elif self.min_args == self.max_args:
                expected = f"exactly {self.min_args}"
            else:
                expected = f"{self.min_args} to {self.max_args}"
            raise CallispArityError(f"{self.name} takes {expected} argument(s), got {n}")

    def __call__(self, env: Environment, args: list[LispValue]) -> LispValue:
        self.check_arity(len(args))
        return self.fn(env, args)

    def __repr__(self) -> str:
        return f"#<builtin {self.name}>"
