from callisp import EvaluatorFn
from callisp import SExpression, LispValue
from callisp.errors import CallispArityError, CallispTypeError
from callisp.types.environment import Environment
from callisp.types.symbol import Symbol


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def name value)
    Binds in the current frame, never a new child, and returns the bound value.
    """
    if len(tail) != 2:
        raise CallispArityError("def requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise CallispTypeError(f"def expects a symbol name, got {name!r}")
    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return value
