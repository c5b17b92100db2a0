from __future__ import annotations
import sys


class Symbol:
    """A callisp symbol. Two symbols are equal exactly when their names are."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        # interned: every occurrence of a name shares one string
        self.id = sys.intern(name)

    def __eq__(self, other: Symbol) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id
