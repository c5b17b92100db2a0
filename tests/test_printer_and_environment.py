import pytest

from callisp.errors import CallispArityError, CallispInvalidSymbol, CallispUnboundSymbol
from callisp.printer import format_number, to_lisp_string
from callisp.types import Builtin, Environment, Lambda, Symbol, Unspecified, UnspecifiedType, type_name


@pytest.mark.parametrize(
    "value,expected",
    [
        (3.0, "3"),
        (-3.0, "-3"),
        (0.0, "0"),
        (2.5, "2.5"),
        (-0.125, "-0.125"),
        (1e20, "1e+20"),
        (True, "true"),
        (False, "false"),
        (Symbol("abc"), "abc"),
        ([], "()"),
        ([1.0, [Symbol("a"), True], []], "(1 (a true) ())"),
        (Unspecified, ""),
    ]
)
def test_to_lisp_string(value, expected):
    assert to_lisp_string(value) == expected


def test_format_number():
    assert format_number(42.0) == "42"
    assert format_number(0.1) == "0.1"
    assert format_number(1e16) == "1e+16"
    assert format_number(float("inf")) == "1e999"
    assert format_number(float("-inf")) == "-1e999"


def test_function_rendering(lisp):
    assert to_lisp_string(lisp("(lambda (x y) (+ x y))")) == "(λ (x y) (+ x y))"
    assert to_lisp_string(lisp("+")) == "#<builtin +>"


def test_type_name():
    assert type_name(True) == "bool"
    assert type_name(1.0) == "number"
    assert type_name(Symbol("a")) == "symbol"
    assert type_name([]) == "list"
    assert type_name(Builtin("f", lambda env, args: None)) == "function"
    assert type_name(Unspecified) == "unspecified"
    with pytest.raises(TypeError):
        type_name("not a value")


# -----------------------------------------------------
# Symbols and Unspecified
# -----------------------------------------------------

def test_symbols_compare_by_name():
    assert Symbol("abc") == Symbol("abc")
    assert hash(Symbol("abc")) == hash(Symbol("abc"))
    assert Symbol("abc") != Symbol("abd")
    assert Symbol("abc") != "abc"
    assert Symbol("abc").id is Symbol("ab" + "c").id
    assert repr(Symbol("x")) == "Symbol('x')"


def test_unspecified_is_a_singleton():
    assert UnspecifiedType() is Unspecified
    assert repr(Unspecified) == "Unspecified"


# -----------------------------------------------------
# Environment
# -----------------------------------------------------

def test_define_and_lookup():
    env = Environment()
    env.define(Symbol("a"), 1.0)
    assert env.lookup(Symbol("a")) == 1.0
    env.define(Symbol("a"), 2.0)
    assert env.lookup(Symbol("a")) == 2.0


def test_lookup_walks_outward():
    outer = Environment()
    inner = Environment(outer=outer)
    outer.define(Symbol("a"), 1.0)
    assert inner.lookup(Symbol("a")) == 1.0
    assert inner.find(Symbol("a")) is outer
    assert inner.find(Symbol("b")) is None
    assert inner.root() is outer


def test_inner_binding_shadows_without_touching_outer():
    outer = Environment()
    inner = Environment(outer=outer)
    outer.define(Symbol("a"), 1.0)
    inner.define(Symbol("a"), 2.0)
    assert inner.lookup(Symbol("a")) == 2.0
    assert outer.lookup(Symbol("a")) == 1.0


def test_unbound_lookup():
    with pytest.raises(CallispUnboundSymbol):
        Environment().lookup(Symbol("nope"))


def test_define_requires_symbol():
    env = Environment()
    with pytest.raises(CallispInvalidSymbol):
        env.define("a", 1.0)
    with pytest.raises(CallispInvalidSymbol):
        env.update({"a": 1.0})


def test_environment_repr():
    outer = Environment()
    outer.define(Symbol("a"), 1.0)
    outer.define(Symbol("b"), 2.0)
    inner = Environment(outer=outer)
    inner.define(Symbol("c"), 3.0)
    assert repr(inner) == "<Environment chain: 1 -> 2>"
    assert str(inner) == "{c: 3.0} -> ..."


def test_lambda_extend_env():
    glob = Environment()
    fn = Lambda([Symbol("x"), Symbol("y")], Symbol("x"), glob)
    frame = fn.extend_env([1.0, 2.0])
    assert frame.outer is glob
    assert frame.lookup(Symbol("y")) == 2.0
    assert glob.find(Symbol("x")) is None
    with pytest.raises(CallispArityError):
        fn.extend_env([1.0])


def test_builtin_arity_messages():
    exact = Builtin("one", lambda env, args: None, 1, 1)
    ranged = Builtin("some", lambda env, args: None, 0, 1)
    variadic = Builtin("many", lambda env, args: None, 1)
    with pytest.raises(CallispArityError, match="exactly 1"):
        exact(None, [])
    with pytest.raises(CallispArityError, match="0 to 1"):
        ranged(None, [1.0, 2.0])
    with pytest.raises(CallispArityError, match="at least 1"):
        variadic(None, [])
    assert variadic(None, [1.0, 2.0, 3.0]) is None
