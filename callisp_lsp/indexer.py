"""
Static indexer for callisp files; nothing is evaluated.

We run the real lexer and reader over the text and collect:
- top-level definitions: (def name ...), (define name ...)
- the first syntax error the reader reports, with its position

Positions are converted to the 0-based line/character pairs LSP expects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from callisp.errors import CallispSyntaxError
from callisp.reader.parser import Token, lex, read

DEFINITION_FORMS = ("def", "define")
LAMBDA_FORMS = ("lambda", "λ")


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class SyntaxProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    error: Optional[SyntaxProblem] = None


def _definition_at(tokens: List[Token], i: int) -> Optional[SymbolDef]:
    # tokens[i] is a top-level '('; match `( def name [( lambda]`
    window = tokens[i + 1:i + 5]
    if len(window) < 2:
        return None
    head, name = window[0], window[1]
    if head.kind != "atom" or head.value not in DEFINITION_FORMS or name.kind != "atom":
        return None
    kind = "var"
    if len(window) >= 4 and window[2].kind == "lparen" and window[3].value in LAMBDA_FORMS:
        kind = "function"
    return SymbolDef(name=name.value, kind=kind, line=name.line - 1, col=name.column - 1)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(lex(text))

    depth = 0
    for i, tok in enumerate(tokens):
        if tok.kind == "lparen":
            if depth == 0:
                sdef = _definition_at(tokens, i)
                if sdef is not None:
                    idx.symbols[sdef.name] = sdef
            depth += 1
        elif tok.kind == "rparen" and depth > 0:
            depth -= 1

    try:
        for _ in read(text):
            pass
    except CallispSyntaxError as e:
        idx.error = SyntaxProblem(
            message=str(e),
            line=(e.line or 1) - 1,
            col=(e.column or 1) - 1,
        )

    return idx


SPECIAL_FORM_SIGNATURES: Dict[str, str] = {
    "def": "(def name value)",
    "define": "(define name value)",
    "lambda": "(lambda (params) body)",
    "λ": "(λ (params) body)",
    "if": "(if condition then else)",
    "quote": "(quote expr)",
}

# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "+": "(+ &rest nums)",
    "-": "(- x &rest nums)",
    "*": "(* &rest nums)",
    "/": "(/ x &rest nums)",
    ">": "(> &rest nums)",
    ">=": "(>= &rest nums)",
    "<": "(< &rest nums)",
    "<=": "(<= &rest nums)",
    "equal?": "(equal? &rest xs)",
    "list": "(list &rest xs)",
    "list?": "(list? x)",
    "empty?": "(empty? xs)",
    "count": "(count xs)",
    "type": "(type x)",
    "eval": "(eval expr)",
    "use": "(use path)",
    "putstr": "(putstr x)",
    "readline": "(readline)",
    "exit": "(exit &optional code)",
}
