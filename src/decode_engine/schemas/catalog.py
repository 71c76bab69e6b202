"""Type catalog entry and schema manifest schemas."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import ConfigDict, field_validator

from .base import SchemaBase
from .nodes import TypeNode


class TypeEntry(SchemaBase):
    """One named type definition in a module's catalog.

    Fields:
        name: Type name, unique within the module.
        type: Root node of the definition.
        params: Generic parameter tokens, in declaration order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    type: TypeNode
    params: Tuple[str, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.params)


class SchemaManifest(SchemaBase):
    """Contents of one module manifest (``<module>.yaml``).

    ``types`` is written as a mapping from type name to either a node, or to
    ``{type: <node>, params: [...]}`` for generic definitions.
    """

    module: Optional[str] = None
    types: Tuple[TypeEntry, ...] = ()

    @field_validator("types", mode="before")
    @classmethod
    def _entries_from_mapping(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        entries = []
        for name, body in value.items():
            if isinstance(body, dict) and "type" in body and "kind" not in body:
                entries.append({"name": name, **body})
            else:
                entries.append({"name": name, "type": body})
        return entries
