"""Render callisp values for humans and for re-reading."""

from __future__ import annotations

import math

from callisp import LispValue
from callisp.types.symbol import Symbol
from callisp.types.unspecified import UnspecifiedType
from callisp.types.lambda_fn import Lambda
from callisp.types.builtin import Builtin


def format_number(x: float) -> str:
    if math.isinf(x):
        # 1e999 overflows to infinity when read back
        return "1e999" if x > 0 else "-1e999"
    # Integral floats display as integers; 1e16 and beyond keep exponent form
    if x.is_integer() and abs(x) < 1e16:
        return str(int(x))
    return repr(x)


def to_lisp_string(x: LispValue) -> str:
    match x:
        case bool():
            return "true" if x else "false"
        case float():
            return format_number(x)
        case Symbol():
            return x.id
        case list():
            return "(" + " ".join(to_lisp_string(e) for e in x) + ")"
        case Lambda():
            return str(x)
        case Builtin():
            return repr(x)
        case UnspecifiedType():
            return ""
    return str(x)
