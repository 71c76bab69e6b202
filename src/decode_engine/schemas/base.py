"""Common schema utilities and base classes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class SchemaBase(BaseModel):
    """Base model with common config for Decode Engine schemas."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="forbid")


class NodeBase(SchemaBase):
    """Base for immutable type nodes.

    A bare string stands for a node of that kind with default parameters, so
    ``"integer"`` and ``{"kind": "integer"}`` load to the same node.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"kind": data}
        return data

    def describe(self) -> str:  # pragma: no cover - overridden by every node
        return str(getattr(self, "kind", "?"))
