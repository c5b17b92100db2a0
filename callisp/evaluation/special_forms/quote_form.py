from callisp import EvaluatorFn
from callisp import SExpression, LispValue
from callisp.errors import CallispArityError
from callisp.types.environment import Environment


def quote_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(quote x) => x, unevaluated."""
    if len(tail) != 1:
        raise CallispArityError("quote expects exactly one argument")
    return tail[0]
