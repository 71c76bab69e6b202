"""Schema exports."""

from .base import NodeBase, SchemaBase
from .catalog import SchemaManifest, TypeEntry
from .config import EngineConfig
from .nodes import (
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

__all__ = [
    "NodeBase",
    "SchemaBase",
    "SchemaManifest",
    "TypeEntry",
    "EngineConfig",
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
