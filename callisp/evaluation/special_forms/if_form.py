from callisp import EvaluatorFn
from callisp import SExpression, LispValue
from callisp.errors import CallispArityError
from callisp.types.environment import Environment


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) != 3:
        raise CallispArityError("if requires a condition, a then-expression and an else-expression")

    cond = evaluate_fn(tail[0], env)
    # Only false is falsy; zero, the empty list and Unspecified are true
    if cond is False:
        return evaluate_fn(tail[2], env)
    return evaluate_fn(tail[1], env)
