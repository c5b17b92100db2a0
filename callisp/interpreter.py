from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Literal, TextIO

from callisp import LispValue
from callisp.builtin.env_builtin import register
from callisp.config import get_prelude_file
from callisp.evaluation.evaluator import evaluate
from callisp.reader.parser import read
from callisp.runtime_context import install_streams
from callisp.types.environment import Environment
from callisp.types.unspecified import Unspecified

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating callisp code.
    Maintains the global Environment across calls, so definitions persist.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ):
        self.env: Environment = Environment()
        register(self.env)
        # streams are process-wide: a later Interpreter given its own replaces them
        install_streams(stdin, stdout)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            path = get_prelude_file()
            if path is not None:
                self.load(path)
        elif prelude:
            self.eval(prelude)

    def eval_iter(self, code: str) -> Iterator[LispValue]:
        """Evaluate top-level forms one at a time, yielding each result.

        Forms before a syntax or evaluation error have already taken effect
        when the error is raised.
        """
        for expr in read(code):
            yield evaluate(expr, self.env)

    def eval(self, code: str) -> LispValue:
        result: LispValue = Unspecified
        for result in self.eval_iter(code):
            pass
        return result

    def load(self, path: str | Path) -> LispValue:
        path = Path(path)
        logger.debug("loading %s", path)
        return self.eval(path.read_text(encoding='utf-8'))
