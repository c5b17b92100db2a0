"""Application engine for callisp.

Centralizes function application for the evaluator and for builtins that
call back into Lisp code:
- Lambda: exact arity, fresh frame chained to the captured environment.
- Builtin: declared arity check, then the native function with the caller's
  environment.
"""

from callisp import LispValue, EvaluatorFn
from callisp.errors import CallispNotCallable
from callisp.printer import to_lisp_string
from callisp.types.builtin import Builtin
from callisp.types.environment import Environment
from callisp.types.lambda_fn import Lambda


def apply_lambda(fn: Lambda, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Bind `args` to the formals of `fn` and evaluate its body.

    Raises CallispArityError unless the argument count matches exactly.
    """
    new_env = fn.extend_env(args)
    return evaluate_fn(fn.body, new_env)


def apply(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Lambda or a Builtin; anything else is not callable."""
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn)
    elif isinstance(head, Builtin):
        return head(env, args)
    else:
        raise CallispNotCallable(f"Cannot apply non-function {to_lisp_string(head)}")
