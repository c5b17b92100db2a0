"""
  Lisp Reader, Lexer and Parser

- Streaming, lazy parsing: top-level forms are yielded one at a time, so a
  caller can evaluate the forms preceding a syntax error.
- Emits Python primitives instead of Cons cells:

    - lists   -> Python list
    - numbers -> float (every numeric literal, integral or not)
    - symbols -> Symbol (including true/false, which the environment resolves)
    - 'x      -> [Symbol("quote"), x]

- Nesting is handled with an explicit stack, so depth is not bounded by the
  Python recursion limit.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from callisp import SExpression
from callisp.errors import CallispSyntaxError
from callisp.printer import to_lisp_string
from callisp.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[^\S\n]+)"  # any whitespace except newline
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<quote>')"
    r"|(?P<atom>[^\s()';]+)"  # numbers and symbols
)

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z")

QUOTE = Symbol("quote")


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    value: str
    line: int  # 1-based
    column: int  # 1-based


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields lparen, rparen, quote and atom tokens with positions."""
    line = 1
    bol = 0  # offset of the beginning of the current line
    # The alternatives cover every character, so matches are contiguous.
    for m in TOKEN_RE.finditer(source):
        kind = m.lastgroup
        if kind == "newline":
            line += 1
            bol = m.end()
            continue
        if kind in ("space", "comment"):
            continue
        yield Token(kind, m.group(), line, m.start() - bol + 1)


def parse_atom(text: str) -> SExpression:
    if NUMBER_RE.match(text):
        return float(text)
    return Symbol(text)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> SExpression:
        """Read one complete expression, or return None at end of input."""
        # Each open frame is the token that opened it plus the items read so far
        stack: list[tuple[Token, list[SExpression]]] = []
        while True:
            tok = self.advance()
            if tok is None:
                if not stack:
                    return None
                opener = stack[-1][0]
                if opener.kind == "quote":
                    raise CallispSyntaxError(
                        "Expected an expression after quote",
                        opener.line,
                        opener.column,
                        incomplete=True,
                    )
                raise CallispSyntaxError(
                    "Unterminated '('", opener.line, opener.column, incomplete=True
                )

            if tok.kind in ("lparen", "quote"):
                stack.append((tok, []))
                continue

            if tok.kind == "rparen":
                if not stack:
                    raise CallispSyntaxError("Unmatched ')'", tok.line, tok.column)
                opener = stack[-1][0]
                if opener.kind == "quote":
                    raise CallispSyntaxError(
                        "Expected an expression after quote", opener.line, opener.column
                    )
                value: SExpression = stack.pop()[1]
            else:
                value = parse_atom(tok.value)

            while stack and stack[-1][0].kind == "quote":
                stack.pop()
                value = [QUOTE, value]
            if not stack:
                return value
            stack[-1][1].append(value)

    def parse_all(self) -> Iterator[SExpression]:
        while (expr := self.parse_expr()) is not None:
            yield expr


def read(source: str) -> Iterator[SExpression]:
    """Lazily read every top-level expression in `source`."""
    return TokenStream(lex(source)).parse_all()


def to_source(expr: SExpression) -> str:
    """Serialize a read expression back to text that reads as the same structure."""
    return to_lisp_string(expr)
