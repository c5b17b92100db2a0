"""callisp Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for callisp source files.
- A lightweight indexer that reads documents with the callisp reader without evaluation.
- A simple TCP REPL server to evaluate code via the Interpreter.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
