from callisp.types.symbol import Symbol
from callisp.types.unspecified import Unspecified, UnspecifiedType
from callisp.types.environment import Environment
from callisp.types.lambda_fn import Lambda
from callisp.types.builtin import Builtin


def is_number(x) -> bool:
    return isinstance(x, float)


def type_name(x) -> str:
    """Name the value-model variant of `x`."""
    match x:
        case bool():
            return "bool"
        case float():
            return "number"
        case Symbol():
            return "symbol"
        case list():
            return "list"
        case Lambda() | Builtin():
            return "function"
        case UnspecifiedType():
            return "unspecified"
    raise TypeError(f"not a callisp value: {x!r}")


__all__ = [
    "Symbol",
    "Unspecified",
    "UnspecifiedType",
    "Environment",
    "Lambda",
    "Builtin",
    "is_number",
    "type_name",
]
