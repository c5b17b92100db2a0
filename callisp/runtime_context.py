from __future__ import annotations

import sys
from typing import Optional, TextIO

# NOTE: process-global, matching the single evaluation thread. None means the
# live sys.stdin/sys.stdout, looked up at call time so redirection is honoured.
_input: Optional[TextIO] = None
_output: Optional[TextIO] = None


def set_streams(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
    global _input, _output
    _input = stdin
    _output = stdout


def get_input() -> TextIO:
    return _input if _input is not None else sys.stdin


def get_output() -> TextIO:
    return _output if _output is not None else sys.stdout


def install_streams(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
    """Replace only the streams that are given; the others stay as they are."""
    global _input, _output
    if stdin is not None:
        _input = stdin
    if stdout is not None:
        _output = stdout
