from __future__ import annotations


class UnspecifiedType:
    """Result of operations whose return value carries no meaning."""

    _instance: UnspecifiedType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "Unspecified"

    def __eq__(self, other):
        return isinstance(other, UnspecifiedType)

    def __hash__(self):
        return hash(UnspecifiedType)


Unspecified = UnspecifiedType()
