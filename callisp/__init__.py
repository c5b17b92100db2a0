# Core type aliases for the callisp data model.
# Plain Python types carry both code (forms) and runtime values:
# float for numbers, bool for booleans, list for lists, plus the Symbol,
# Lambda, Builtin and Unspecified types under callisp.types.
#
# Naming guidance:
# - SExpression: use in reader code to denote syntactic forms (code-as-data).
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both resolve to `Any` and are interchangeable, since code is data.

from typing import Any, Callable

LispValue = Any
SExpression = LispValue

# Evaluator function type, handed to special forms and builtins
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.3.0"
