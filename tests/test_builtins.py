import io

import pytest

from callisp import errors
from callisp.builtin import BUILTINS
from callisp.interpreter import Interpreter
from callisp.types import Builtin, Symbol, Unspecified


def test_every_builtin_is_bound(env):
    for name in BUILTINS:
        assert isinstance(env.lookup(Symbol(name)), Builtin)
    assert env.lookup(Symbol("true")) is True
    assert env.lookup(Symbol("false")) is False


# -----------------------------------------------------
# equal?
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(equal? 1 1)", True),
        ("(equal? 1 2)", False),
        ("(equal? 1 1 1)", True),
        ("(equal? 1 1 2)", False),
        ("(equal?)", True),
        ("(equal? 5)", True),
        ("(equal? 'a 'a)", True),
        ("(equal? 'a 'b)", False),
        ("(equal? true true)", True),
        ("(equal? true false)", False),
        ("(equal? '(1 (2 a)) (list 1 (list 2 'a)))", True),
        ("(equal? '(1 2) '(1 2 3))", False),
        ("(equal? (list) '())", True),
        # values of different variants are never equal
        ("(equal? 1 true)", False),
        ("(equal? 0 false)", False),
        ("(equal? '1 'a)", False),
        ("(equal? '(1) 1)", False),
    ]
)
def test_equal(lisp, source, expected):
    assert lisp(source) is expected


def test_equal_functions_by_identity(lisp):
    lisp("(def f (lambda (x) x))")
    assert lisp("(equal? f f)") is True
    assert lisp("(equal? + +)") is True
    assert lisp("(equal? f (lambda (x) x))") is False
    assert lisp("(equal? + -)") is False


# -----------------------------------------------------
# Lists
# -----------------------------------------------------

def test_list_construction(lisp):
    assert lisp("(list)") == []
    assert lisp("(list 1 (+ 1 1) 'c)") == [1.0, 2.0, Symbol("c")]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(list? (list))", True),
        ("(list? '(1 2))", True),
        ("(list? 1)", False),
        ("(list? 'a)", False),
        ("(list? +)", False),
        ("(empty? (list))", True),
        ("(empty? '(1))", False),
        ("(empty? '(()))", False),
    ]
)
def test_list_predicates(lisp, source, expected):
    assert lisp(source) is expected


def test_count(lisp):
    assert lisp("(count (list))") == 0
    assert lisp("(count '(1 2 (3 4)))") == 3
    assert type(lisp("(count '(a))")) is float


@pytest.mark.parametrize("source", ["(count 1)", "(empty? 'a)", "(count true)"])
def test_list_builtins_reject_non_lists(lisp, source):
    with pytest.raises(errors.CallispTypeError):
        lisp(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(type 1)", "number"),
        ("(type true)", "bool"),
        ("(type 'a)", "symbol"),
        ("(type '(1))", "list"),
        ("(type +)", "function"),
        ("(type (lambda () 1))", "function"),
        ("(type (putstr 'x))", "unspecified"),
        ("(type (type 1))", "symbol"),
    ]
)
def test_type(interp, source, expected):
    assert interp.eval(source) == Symbol(expected)


# -----------------------------------------------------
# eval
# -----------------------------------------------------

def test_eval(lisp):
    assert lisp("(eval '(+ 1 2))") == 3
    assert lisp("(eval (list + 1 2))") == 3
    assert lisp("(eval 5)") == 5


def test_eval_uses_calling_environment(lisp):
    lisp("(def f (lambda (x) (eval 'x)))")
    assert lisp("(f 9)") == 9


def test_eval_can_define(lisp):
    lisp("(eval '(def z 4))")
    assert lisp("z") == 4


# -----------------------------------------------------
# use
# -----------------------------------------------------

def test_use_evaluates_file_in_calling_env(lisp, tmp_path, monkeypatch):
    (tmp_path / "lib.lisp").write_text("(def sq (lambda (x) (* x x)))\n(sq 3)\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert lisp("(use 'lib.lisp)") == 9
    assert lisp("(sq 4)") == 16


def test_use_searches_callisp_path(lisp, tmp_path, monkeypatch):
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "extra.lisp").write_text("(def answer 42)", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CALLISP_PATH", str(lib))
    assert lisp("(use 'extra.lisp)") == 42


def test_use_empty_file(lisp, tmp_path, monkeypatch):
    (tmp_path / "empty.lisp").write_text("; nothing here\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert lisp("(use 'empty.lisp)") is Unspecified


def test_use_missing_file(lisp, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CALLISP_PATH", raising=False)
    with pytest.raises(errors.CallispIOError):
        lisp("(use 'missing.lisp)")


def test_use_requires_symbol(lisp):
    with pytest.raises(errors.CallispTypeError):
        lisp("(use 1)")


def test_use_error_aborts_rest_of_file(lisp, tmp_path, monkeypatch):
    (tmp_path / "bad.lisp").write_text("(def a 1)\n(/ 1 0)\n(def b 2)\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(errors.CallispDivisionByZero):
        lisp("(use 'bad.lisp)")
    assert lisp("a") == 1
    with pytest.raises(errors.CallispUnboundSymbol):
        lisp("b")


def test_use_reports_syntax_errors(lisp, tmp_path, monkeypatch):
    (tmp_path / "broken.lisp").write_text("(def a (+ 1 2)", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(errors.CallispSyntaxError):
        lisp("(use 'broken.lisp)")


# -----------------------------------------------------
# putstr, readline and exit
# -----------------------------------------------------

def test_putstr(interp, stdout):
    assert interp.eval("(putstr 'hello)") is Unspecified
    interp.eval("(putstr (+ 1 2))")
    interp.eval("(putstr '(a (1 2.5) true))")
    interp.eval("(putstr false)")
    assert stdout.getvalue() == "hello\n3\n(a (1 2.5) true)\nfalse\n"


def test_readline():
    interp = Interpreter(prelude=None, stdin=io.StringIO("first line\r\nsecond\n"), stdout=io.StringIO())
    assert interp.eval("(readline)") == Symbol("first line")
    assert interp.eval("(readline)") == Symbol("second")
    # end of input
    assert interp.eval("(readline)") == Symbol("")


def test_readline_echo():
    out = io.StringIO()
    interp = Interpreter(prelude=None, stdin=io.StringIO("bob\n"), stdout=out)
    interp.eval("(def name (readline))")
    interp.eval("(putstr name)")
    assert out.getvalue() == "bob\n"


@pytest.mark.parametrize("source,code", [("(exit)", 0), ("(exit 3)", 3), ("(exit 3.7)", 3)])
def test_exit(lisp, source, code):
    with pytest.raises(SystemExit) as info:
        lisp(source)
    assert info.value.code == code


@pytest.mark.parametrize("source", ["(exit 'now)", "(exit 1e400)", "(exit -1e400)", "(exit (- 1e400 1e400))"])
def test_exit_rejects_non_numbers(lisp, source):
    with pytest.raises(errors.CallispTypeError):
        lisp(source)
