"""Lambda function representation and argument binding for callisp."""

from __future__ import annotations

from io import StringIO

from callisp import SExpression, LispValue
from callisp.errors import CallispArityError
from callisp.types.environment import Environment
from callisp.types.symbol import Symbol


class Lambda:
    """A first-class lambda with formal parameters, body, and closure env."""

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: list[Symbol], body: SExpression, env: Environment):
        self.formals: list[Symbol] = formals
        self.body: SExpression = body
        # Captured by reference: later definitions in `env` are visible to the body
        self.env: Environment = env

    def __str__(self) -> str:
        from callisp.printer import to_lisp_string

        with StringIO() as buffer:
            buffer.write("(λ (")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write(") ")
            buffer.write(to_lisp_string(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)

    def extend_env(self, args: list[LispValue]) -> Environment:
        """Bind argument values to the formals in a fresh child of the closure env."""
        if len(args) != len(self.formals):
            raise CallispArityError(
                f"{self} expects {len(self.formals)} argument(s), got {len(args)}"
            )
        new_env = Environment(outer=self.env)
        for name, value in zip(self.formals, args):
            new_env.define(name, value)
        return new_env
