"""Core evaluator for the callisp interpreter.

A plain recursive tree walk: special forms are dispatched through the
SPECIAL_FORMS table, everything else is an ordinary application. There is no
tail-call elimination, so evaluation depth follows call nesting depth and deep
recursion surfaces as a RecursionError.
"""

from __future__ import annotations

from callisp import SExpression, LispValue
from callisp.errors import CallispEmptyApplication
from callisp.types.environment import Environment
from callisp.types.symbol import Symbol
from callisp.evaluation.apply import apply
from callisp.evaluation.special_forms import SPECIAL_FORMS


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    match expr:
        case Symbol():
            return env.lookup(expr)

        case []:
            raise CallispEmptyApplication("Cannot evaluate the empty list: it has no callable head")

        case [Symbol() as head, *tail_args] if head in SPECIAL_FORMS:
            return SPECIAL_FORMS[head](tail_args, env, evaluate)

        case [head, *tail_args]:
            fn = evaluate(head, env)
            args = [evaluate(arg, env) for arg in tail_args]
            return apply(fn, args, env, evaluate)

    # --- Atoms, functions and Unspecified return as-is ---
    return expr
