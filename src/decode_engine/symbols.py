"""Interned symbolic constants.

A ``Symbol`` is a named constant that is distinct from a string and compared by
identity. Symbols live in one process-wide table: ``Symbol.intern`` is the only
way to create one, ``Symbol.lookup`` and ``Symbol.existing`` only resolve names
that were interned before. Decoding untrusted input must go through the
resolving calls so that input can never grow the table.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from pydantic_core import core_schema


class Symbol:
    """Interned named constant."""

    __slots__ = ("name", "__weakref__")

    _table: Dict[str, "Symbol"] = {}
    _lock = threading.Lock()

    def __init__(self, name: str):
        raise TypeError("use Symbol.intern() to create symbols")

    @classmethod
    def intern(cls, name: str) -> "Symbol":
        """Return the symbol for ``name``, creating it on first use."""
        if not isinstance(name, str):
            raise TypeError(f"symbol name must be a string, got {type(name).__name__}")
        symbol = cls._table.get(name)
        if symbol is not None:
            return symbol
        with cls._lock:
            symbol = cls._table.get(name)
            if symbol is None:
                symbol = object.__new__(cls)
                object.__setattr__(symbol, "name", name)
                cls._table[name] = symbol
        return symbol

    @classmethod
    def lookup(cls, name: str) -> Optional["Symbol"]:
        """Return the already-interned symbol for ``name`` or None."""
        return cls._table.get(name)

    @classmethod
    def existing(cls, name: str) -> "Symbol":
        """Return the already-interned symbol for ``name``.

        Raises:
            KeyError: If no symbol with that name has been interned.
        """
        symbol = cls._table.get(name)
        if symbol is None:
            raise KeyError(f"unknown symbol: {name}")
        return symbol

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError("Symbol is immutable")

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"

    def __str__(self) -> str:
        return self.name

    def __reduce__(self):
        return (Symbol.intern, (self.name,))

    def __copy__(self) -> "Symbol":
        return self

    def __deepcopy__(self, memo) -> "Symbol":
        return self

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        # Schema manifests are trusted input, so names found there are interned.
        return core_schema.no_info_plain_validator_function(
            _symbol_from_schema,
            serialization=core_schema.to_string_ser_schema(),
        )


def _symbol_from_schema(value: Any) -> Symbol:
    if isinstance(value, Symbol):
        return value
    if isinstance(value, str):
        return Symbol.intern(value)
    raise ValueError(f"expected symbol name, got {type(value).__name__}")


def sym(name: str) -> Symbol:
    """Shorthand for ``Symbol.intern``."""
    return Symbol.intern(name)


__all__ = ["Symbol", "sym"]
