"""Type node schemas: the tagged tree every type definition is made of.

Per the decoding model, a type definition is an immutable tree of nodes. The
decoder walks this tree in lock-step with an input value; the node variant,
never the input's shape, selects the conversion rule.

Variants:
- PrimitiveNode: leaf kinds identified by ``PrimitiveKind``.
- LiteralNode: exactly one value (symbol, bool, int, float or None).
- TupleNode: any tuple (``elements=None``) or a fixed sequence of element types.
- ListNode: empty, any or typed lists.
- MapNode: empty, any, homogeneous (key/value types) or a declared field set.
- RecordNode: named record with a closed field set; ``name=None`` is any record.
- UnionNode: ordered alternatives, first match wins.
- RefNode: reference to a named type in the catalog, optionally with type args.
- VarNode: generic type parameter bound by the enclosing instantiation.

Invariants:
- Trees are acyclic; recursion between types only happens through RefNode.
- Nodes are frozen once built.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import ConfigDict, Discriminator, Field, Tag, field_validator, model_validator

from ..symbols import Symbol
from .base import NodeBase, SchemaBase


class PrimitiveKind(str, Enum):
    ANY = "any"
    NONE = "none"
    SYMBOL = "symbol"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    NUMBER = "number"
    NEG_INTEGER = "neg_integer"
    NON_NEG_INTEGER = "non_neg_integer"
    POS_INTEGER = "pos_integer"
    STRING = "string"
    MODULE = "module"


class ListShape(str, Enum):
    EMPTY = "empty"
    ANY = "any"
    TYPED = "typed"


class MapShape(str, Enum):
    EMPTY = "empty"
    ANY = "any"
    HOMOGENEOUS = "homogeneous"
    FIELDS = "fields"


_PRIMITIVE_LABELS = {
    PrimitiveKind.ANY: "any",
    PrimitiveKind.NONE: "none",
    PrimitiveKind.SYMBOL: "symbol",
    PrimitiveKind.BOOLEAN: "boolean",
    PrimitiveKind.INTEGER: "integer",
    PrimitiveKind.FLOAT: "float",
    PrimitiveKind.NUMBER: "number",
    PrimitiveKind.NEG_INTEGER: "negative integer",
    PrimitiveKind.NON_NEG_INTEGER: "non-negative integer",
    PrimitiveKind.POS_INTEGER: "positive integer",
    PrimitiveKind.STRING: "string",
    PrimitiveKind.MODULE: "module",
}


class PrimitiveNode(NodeBase):
    kind: PrimitiveKind

    def describe(self) -> str:
        return _PRIMITIVE_LABELS[self.kind]


class LiteralNode(NodeBase):
    """Matches exactly one value.

    Strings in a literal position name symbols; there are no string literals.
    """

    kind: Literal["literal"] = "literal"
    value: Any = None

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Symbol.intern(value)
        if value is None or isinstance(value, (Symbol, bool, int, float)):
            return value
        raise ValueError(f"unsupported literal value: {value!r}")

    def describe(self) -> str:
        if self.value is None:
            return "nil"
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


class TupleNode(NodeBase):
    kind: Literal["tuple"] = "tuple"
    elements: Optional[Tuple[TypeNode, ...]] = None

    def describe(self) -> str:
        if self.elements is None:
            return "tuple"
        return "{" + ", ".join(node.describe() for node in self.elements) + "}"


class ListNode(NodeBase):
    kind: Literal["list"] = "list"
    shape: ListShape = ListShape.ANY
    element: Optional[TypeNode] = None

    @model_validator(mode="before")
    @classmethod
    def _infer_shape(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("element") is not None and "shape" not in data:
            return {**data, "shape": ListShape.TYPED}
        return data

    @model_validator(mode="after")
    def _check_element(self) -> "ListNode":
        if (self.shape == ListShape.TYPED) != (self.element is not None):
            raise ValueError("typed lists (and only typed lists) declare an element type")
        return self

    def describe(self) -> str:
        if self.shape == ListShape.EMPTY:
            return "[]"
        if self.shape == ListShape.ANY:
            return "list"
        return f"[{self.element.describe()}]"


class FieldSpec(SchemaBase):
    """One declared field of a field-set map or record.

    ``required`` is consulted by field-set maps; records always materialise
    every field, falling back to ``default`` when the input lacks it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: Symbol
    type: TypeNode
    required: bool = True
    default: Any = None

    def describe(self) -> str:
        marker = "" if self.required else "optional "
        return f"{marker}{self.key}: {self.type.describe()}"


class MapNode(NodeBase):
    kind: Literal["map"] = "map"
    shape: MapShape = MapShape.ANY
    key: Optional[TypeNode] = None
    value: Optional[TypeNode] = None
    fields: Tuple[FieldSpec, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _infer_shape(cls, data: Any) -> Any:
        if isinstance(data, dict) and "shape" not in data:
            if "fields" in data:
                return {**data, "shape": MapShape.FIELDS}
            if "key" in data or "value" in data:
                return {**data, "shape": MapShape.HOMOGENEOUS}
        return data

    @model_validator(mode="after")
    def _check_shape(self) -> "MapNode":
        if self.shape == MapShape.HOMOGENEOUS and (self.key is None or self.value is None):
            raise ValueError("homogeneous maps declare both key and value types")
        return self

    def describe(self) -> str:
        if self.shape == MapShape.EMPTY:
            return "%{}"
        if self.shape == MapShape.ANY:
            return "map"
        if self.shape == MapShape.HOMOGENEOUS:
            return f"%{{{self.key.describe()} => {self.value.describe()}}}"
        return "%{" + ", ".join(spec.describe() for spec in self.fields) + "}"


class RecordNode(NodeBase):
    kind: Literal["record"] = "record"
    name: Optional[Symbol] = None
    fields: Tuple[FieldSpec, ...] = ()

    def describe(self) -> str:
        if self.name is None:
            return "record"
        return f"%{self.name}{{}}"


class UnionNode(NodeBase):
    kind: Literal["union"] = "union"
    members: Tuple[TypeNode, ...] = Field(min_length=1)

    def describe(self) -> str:
        return " | ".join(node.describe() for node in self.members)


class RefNode(NodeBase):
    """Reference to a named catalog type; ``module=None`` means the referring module."""

    kind: Literal["ref"] = "ref"
    name: str
    module: Optional[str] = None
    args: Tuple[TypeNode, ...] = ()

    def describe(self) -> str:
        target = f"{self.module}.{self.name}" if self.module else self.name
        return f"{target}({', '.join(node.describe() for node in self.args)})"


class VarNode(NodeBase):
    kind: Literal["var"] = "var"
    token: str

    def describe(self) -> str:
        return self.token


_COMPOSITE_TAGS = {"literal", "tuple", "list", "map", "record", "union", "ref", "var"}


def _node_tag(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        kind = value.get("kind")
    elif isinstance(value, str):
        kind = value
    else:
        kind = getattr(value, "kind", None)
    if isinstance(kind, PrimitiveKind) or kind in PrimitiveKind._value2member_map_:
        return "primitive"
    if kind in _COMPOSITE_TAGS:
        return kind
    return None


TypeNode = Annotated[
    Union[
        Annotated[PrimitiveNode, Tag("primitive")],
        Annotated[LiteralNode, Tag("literal")],
        Annotated[TupleNode, Tag("tuple")],
        Annotated[ListNode, Tag("list")],
        Annotated[MapNode, Tag("map")],
        Annotated[RecordNode, Tag("record")],
        Annotated[UnionNode, Tag("union")],
        Annotated[RefNode, Tag("ref")],
        Annotated[VarNode, Tag("var")],
    ],
    Discriminator(_node_tag),
]


for _model in (TupleNode, ListNode, FieldSpec, MapNode, RecordNode, UnionNode, RefNode):
    _model.model_rebuild()


__all__ = [
    "FieldSpec",
    "ListNode",
    "ListShape",
    "LiteralNode",
    "MapNode",
    "MapShape",
    "PrimitiveKind",
    "PrimitiveNode",
    "RecordNode",
    "RefNode",
    "TupleNode",
    "TypeNode",
    "UnionNode",
    "VarNode",
]
