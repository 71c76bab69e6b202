"""Builder functions for assembling type nodes in Python code.

Intended to be imported under a short alias::

    from decode_engine import builders as t

    box = t.entry("box", t.fields(t.field("value", t.var("T"))), params=["T"])
    maybe_int = t.entry("maybe_int", t.ref("maybe", t.integer()))

Builders for kinds whose natural names are Python builtins carry a trailing
underscore (``any_``, ``float_``).
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Union

from .schemas.catalog import TypeEntry
from .schemas.nodes import (
    FieldSpec,
    ListNode,
    ListShape,
    LiteralNode,
    MapNode,
    MapShape,
    PrimitiveKind,
    PrimitiveNode,
    RecordNode,
    RefNode,
    TupleNode,
    TypeNode,
    UnionNode,
    VarNode,
)
from .symbols import Symbol
from .temporal import TEMPORAL_MODULE


def _primitive(kind: PrimitiveKind) -> PrimitiveNode:
    return PrimitiveNode(kind=kind)


def any_() -> PrimitiveNode:
    return _primitive(PrimitiveKind.ANY)


def none() -> PrimitiveNode:
    return _primitive(PrimitiveKind.NONE)


def symbol() -> PrimitiveNode:
    return _primitive(PrimitiveKind.SYMBOL)


def boolean() -> PrimitiveNode:
    return _primitive(PrimitiveKind.BOOLEAN)


def integer() -> PrimitiveNode:
    return _primitive(PrimitiveKind.INTEGER)


def float_() -> PrimitiveNode:
    return _primitive(PrimitiveKind.FLOAT)


def number() -> PrimitiveNode:
    return _primitive(PrimitiveKind.NUMBER)


def neg_integer() -> PrimitiveNode:
    return _primitive(PrimitiveKind.NEG_INTEGER)


def non_neg_integer() -> PrimitiveNode:
    return _primitive(PrimitiveKind.NON_NEG_INTEGER)


def pos_integer() -> PrimitiveNode:
    return _primitive(PrimitiveKind.POS_INTEGER)


def string() -> PrimitiveNode:
    return _primitive(PrimitiveKind.STRING)


def module() -> PrimitiveNode:
    return _primitive(PrimitiveKind.MODULE)


def literal(value: Any) -> LiteralNode:
    """Literal node; a string value names a symbol."""
    return LiteralNode(value=value)


def any_tuple() -> TupleNode:
    return TupleNode()


def tuple_of(*elements: TypeNode) -> TupleNode:
    return TupleNode(elements=elements)


def any_list() -> ListNode:
    return ListNode(shape=ListShape.ANY)


def empty_list() -> ListNode:
    return ListNode(shape=ListShape.EMPTY)


def list_of(element: TypeNode) -> ListNode:
    return ListNode(shape=ListShape.TYPED, element=element)


def any_map() -> MapNode:
    return MapNode(shape=MapShape.ANY)


def empty_map() -> MapNode:
    return MapNode(shape=MapShape.EMPTY)


def map_of(key: TypeNode, value: TypeNode) -> MapNode:
    return MapNode(shape=MapShape.HOMOGENEOUS, key=key, value=value)


def field(
    key: Union[str, Symbol],
    type: TypeNode,
    required: bool = True,
    default: Any = None,
) -> FieldSpec:
    return FieldSpec(key=key, type=type, required=required, default=default)


def optional(key: Union[str, Symbol], type: TypeNode) -> FieldSpec:
    return FieldSpec(key=key, type=type, required=False)


def fields(*specs: FieldSpec) -> MapNode:
    return MapNode(shape=MapShape.FIELDS, fields=specs)


def record(name: Union[str, Symbol], *specs: FieldSpec) -> RecordNode:
    return RecordNode(name=name, fields=specs)


def any_record() -> RecordNode:
    return RecordNode()


def union(*members: TypeNode) -> UnionNode:
    return UnionNode(members=members)


def ref(name: str, *args: TypeNode, module: Optional[str] = None) -> RefNode:
    return RefNode(name=name, module=module, args=args)


def var(token: str) -> VarNode:
    return VarNode(token=token)


def date() -> RefNode:
    return RefNode(module=TEMPORAL_MODULE, name="date")


def naive_datetime() -> RefNode:
    return RefNode(module=TEMPORAL_MODULE, name="naive_datetime")


def datetime() -> RefNode:
    return RefNode(module=TEMPORAL_MODULE, name="datetime")


def entry(name: str, type: TypeNode, params: Iterable[str] = ()) -> TypeEntry:
    return TypeEntry(name=name, type=type, params=tuple(params))
