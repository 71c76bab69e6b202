"""Typed record values produced by record schemas."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterator

from .symbols import Symbol


class Record(Mapping):
    """Fixed-shape value tagged with the kind of record it is.

    Records behave as read-only mappings keyed by field symbols, so anything
    that accepts a mapping (including re-decoding) accepts a record. Fields can
    also be read as attributes: ``record.name`` is ``record[Symbol.existing("name")]``.
    """

    __slots__ = ("_kind", "_fields")

    def __init__(self, kind: Symbol, fields: Mapping):
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_fields", dict(fields))

    @property
    def kind(self) -> Symbol:
        return self._kind

    def __getitem__(self, key: Any) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        symbol = Symbol.lookup(name)
        if symbol is None or symbol not in self._fields:
            raise AttributeError(f"record {self._kind} has no field {name!r}")
        return self._fields[symbol]

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Record is immutable; use replace()")

    def replace(self, **changes: Any) -> "Record":
        """Return a copy with the named fields overridden."""
        fields = dict(self._fields)
        for name, value in changes.items():
            symbol = Symbol.lookup(name)
            if symbol is None or symbol not in fields:
                raise KeyError(f"record {self._kind} has no field {name!r}")
            fields[symbol] = value
        return Record(self._kind, fields)

    def as_dict(self) -> Dict[Symbol, Any]:
        return dict(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._kind is other._kind and self._fields == other._fields

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{key}={value!r}" for key, value in self._fields.items())
        return f"Record({self._kind}, {body})"

    def __reduce__(self):
        return (Record, (self._kind, self._fields))


__all__ = ["Record"]
