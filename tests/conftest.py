import io

import pytest

from callisp.builtin.env_builtin import register
from callisp.evaluation.evaluator import evaluate
from callisp.interpreter import Interpreter
from callisp.reader.parser import read
from callisp.runtime_context import set_streams
from callisp.types import Environment, Unspecified


@pytest.fixture(autouse=True)
def _reset_streams():
    # Interpreter instances install process-global streams
    yield
    set_streams()


@pytest.fixture
def env():
    """Fresh global environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def lisp(env):
    """Evaluate every form of a source string in `env`; returns the last value."""
    def run(source):
        result = Unspecified
        for expr in read(source):
            result = evaluate(expr, env)
        return result
    return run


@pytest.fixture
def stdout():
    return io.StringIO()


@pytest.fixture
def interp(stdout):
    return Interpreter(prelude=None, stdin=io.StringIO(""), stdout=stdout)
