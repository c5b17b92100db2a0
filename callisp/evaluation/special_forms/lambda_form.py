from callisp.errors import CallispArityError, CallispTypeError
from callisp.types.lambda_fn import Lambda

from callisp import EvaluatorFn
from callisp import SExpression, LispValue
from callisp.types.environment import Environment
from callisp.types.symbol import Symbol


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    # (lambda (params) body): exactly one body expression, not evaluated here.
    if len(tail) != 2:
        raise CallispArityError("lambda requires a parameter list and a single body expression")

    params, body = tail
    if not isinstance(params, list) or not all(isinstance(p, Symbol) for p in params):
        raise CallispTypeError("lambda parameters must be a list of symbols")

    return Lambda(list(params), body, env)
