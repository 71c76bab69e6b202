"""Schema-directed decoder.

The decoder converts loosely-typed data (what a JSON-like parser produces:
dicts, lists, strings, numbers, booleans, None) into values shaped by a type
node tree. The node variant alone selects the conversion rule; the input's
runtime shape is only checked for compatibility with that rule.

Rules per node:
- Primitive kinds check the input's runtime kind; bools are never numbers and
  ``float`` widens ints. ``symbol`` resolves strings to existing symbols only.
- Literals match one value, with string forms accepted for symbols and booleans.
- Tuples accept tuples or lists; fixed tuples check length and each element.
- Lists, maps and field sets rebuild their contents element by element.
- Records start from their zero value and override what the input provides.
- Unions try members in order and keep the first success.
- References resolve through the catalog with a fresh parameter environment;
  variables resolve through the current one.

Errors propagate as exceptions inside the decoder. ``Decoder.decode`` is the
boundary that turns them into ``(value, error)`` pairs.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .catalog import TypeCatalog
from .environment import EMPTY_ENVIRONMENT, Binding, Environment, bind
from .exceptions import ConvertError, DecodeEngineError, TypeNotFound, UnboundTypeVariable
from .schemas.nodes import (
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
from .temporal import converter_for
from .values import Record

DEFAULT_TYPE = "t"

_MISSING = object()


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return _is_integer(value) or isinstance(value, float)


def _checked(label: str, predicate: Callable[[Any], bool]) -> Callable[[Any], Any]:
    def rule(value: Any) -> Any:
        if predicate(value):
            return value
        raise ConvertError(label, value)

    return rule


def _to_any(value: Any) -> Any:
    return value


def _to_none(value: Any) -> Any:
    raise ConvertError("none", value)


def _to_float(value: Any) -> float:
    if isinstance(value, float):
        return value
    if _is_integer(value):
        try:
            return float(value)
        except OverflowError as exc:
            raise ConvertError("float", value, "integer out of float range") from exc
    raise ConvertError("float", value)


def _to_symbol(value: Any) -> Symbol:
    if isinstance(value, Symbol):
        return value
    if isinstance(value, str):
        symbol = Symbol.lookup(value)
        if symbol is None:
            raise ConvertError("symbol", value, "no existing symbol has this name")
        return symbol
    raise ConvertError("symbol", value)


_PRIMITIVE_RULES: Dict[PrimitiveKind, Callable[[Any], Any]] = {
    PrimitiveKind.ANY: _to_any,
    PrimitiveKind.NONE: _to_none,
    PrimitiveKind.SYMBOL: _to_symbol,
    PrimitiveKind.BOOLEAN: _checked("boolean", lambda v: isinstance(v, bool)),
    PrimitiveKind.INTEGER: _checked("integer", _is_integer),
    PrimitiveKind.FLOAT: _to_float,
    PrimitiveKind.NUMBER: _checked("number", _is_number),
    PrimitiveKind.NEG_INTEGER: _checked("negative integer", lambda v: _is_integer(v) and v < 0),
    PrimitiveKind.NON_NEG_INTEGER: _checked("non-negative integer", lambda v: _is_integer(v) and v >= 0),
    PrimitiveKind.POS_INTEGER: _checked("positive integer", lambda v: _is_integer(v) and v > 0),
    PrimitiveKind.STRING: _checked("string", lambda v: isinstance(v, str)),
}


def lookup_field(data: Mapping, key: Symbol) -> Any:
    """Find a declared field by its symbol, else by the symbol's name.

    Returns the module-private ``_MISSING`` marker when neither is present.
    """
    if key in data:
        return data[key]
    if key.name in data:
        return data[key.name]
    return _MISSING


def _segment(key: Any) -> Any:
    if isinstance(key, Symbol):
        return key.name
    if isinstance(key, (str, int)) and not isinstance(key, bool):
        return key
    return repr(key)


def _normalize_keys(data: Mapping) -> Dict[Any, Any]:
    result = {}
    for key, item in data.items():
        if isinstance(key, str):
            key = Symbol.lookup(key) or key
        result[key] = item
    return result


class Decoder:
    """Decode values against named types from a ``TypeCatalog``."""

    def __init__(self, catalog: TypeCatalog, default_type: str = DEFAULT_TYPE):
        self.catalog = catalog
        self.default_type = default_type
        self._handlers: Dict[type, Callable[[Any, Any, str, Environment], Any]] = {
            PrimitiveNode: self._decode_primitive,
            LiteralNode: self._decode_literal,
            TupleNode: self._decode_tuple,
            ListNode: self._decode_list,
            MapNode: self._decode_map,
            RecordNode: self._decode_record,
            UnionNode: self._decode_union,
            RefNode: self._decode_ref,
            VarNode: self._decode_var,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def decode(
        self,
        value: Any,
        module: str,
        name: Optional[str] = None,
        args: Sequence[TypeNode] = (),
    ) -> Tuple[Any, Optional[DecodeEngineError]]:
        """Decode ``value`` as ``module.name``.

        Returns (decoded, None) on success, (None, error) on failure.
        """
        try:
            return self.decode_or_raise(value, module, name, args), None
        except DecodeEngineError as exc:
            return None, exc

    def decode_or_raise(
        self,
        value: Any,
        module: str,
        name: Optional[str] = None,
        args: Sequence[TypeNode] = (),
    ) -> Any:
        """Decode ``value`` as ``module.name``, raising on failure.

        Args:
            value: Loosely-typed input.
            module: Module holding the type.
            name: Type name; defaults to the decoder's default type.
            args: Type arguments for a generic type, written in ``module``.

        Raises:
            SchemaNotFound: If ``module`` (or a module it references) has no catalog.
            TypeNotFound: If a referenced type is absent or has another arity.
            ConvertError: If the value does not fit the type.
        """
        bindings = [Binding(module, arg, EMPTY_ENVIRONMENT) for arg in args]
        return self.instantiate(value, module, name or self.default_type, bindings)

    def instantiate(self, value: Any, module: str, name: str, bindings: Sequence[Binding]) -> Any:
        """Decode against a named type, binding its parameters to ``bindings``."""
        entry = self.catalog.resolve(module, name)
        if entry.arity != len(bindings):
            raise TypeNotFound(module, name, len(bindings))
        return self.decode_node(value, entry.type, module, bind(entry.params, bindings))

    def decode_node(
        self,
        value: Any,
        node: TypeNode,
        module: str,
        env: Environment = EMPTY_ENVIRONMENT,
    ) -> Any:
        handler = self._handlers.get(type(node))
        if handler is None:
            raise TypeError(f"unsupported type node: {node!r}")
        return handler(value, node, module, env)

    def attempt(
        self,
        value: Any,
        node: TypeNode,
        module: str,
        env: Environment = EMPTY_ENVIRONMENT,
    ) -> Tuple[Any, Optional[ConvertError]]:
        """Decode one node, returning (value, None) or (None, ConvertError)."""
        try:
            return self.decode_node(value, node, module, env), None
        except ConvertError as exc:
            return None, exc

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def _decode_primitive(self, value: Any, node: PrimitiveNode, module: str, env: Environment) -> Any:
        if node.kind == PrimitiveKind.MODULE:
            return self._to_module(value)
        return _PRIMITIVE_RULES[node.kind](value)

    def _to_module(self, value: Any) -> Symbol:
        # A symbol is only minted for a name the catalog knows as a module.
        if isinstance(value, Symbol):
            name = value.name
        elif isinstance(value, str):
            name = value
        else:
            raise ConvertError("module", value)
        if not self.catalog.has_module(name):
            raise ConvertError("module", value, "no such module")
        return Symbol.intern(name)

    def _decode_literal(self, value: Any, node: LiteralNode, module: str, env: Environment) -> Any:
        expected = node.value
        if isinstance(value, str):
            if isinstance(expected, Symbol):
                if Symbol.lookup(value) is expected:
                    return expected
                raise ConvertError(node.describe(), value)
            if isinstance(expected, bool) and value == ("true" if expected else "false"):
                return expected
            if expected is None and value == "nil":
                return None
        if type(value) is type(expected) and value == expected:
            return expected
        raise ConvertError(node.describe(), value)

    # ------------------------------------------------------------------
    # Composites
    # ------------------------------------------------------------------

    def _decode_at(self, value: Any, segment: Any, node: TypeNode, module: str, env: Environment) -> Any:
        try:
            return self.decode_node(value, node, module, env)
        except ConvertError as exc:
            raise exc.within(segment)

    def _decode_tuple(self, value: Any, node: TupleNode, module: str, env: Environment) -> tuple:
        if node.elements is None:
            if isinstance(value, tuple):
                return value
            if isinstance(value, list):
                return tuple(value)
            raise ConvertError("tuple", value)

        items = list(value) if isinstance(value, tuple) else value
        if not isinstance(items, list):
            raise ConvertError(node.describe(), value)
        if len(items) != len(node.elements):
            raise ConvertError(
                node.describe(), value, f"expected {len(node.elements)} elements, got {len(items)}"
            )
        return tuple(
            self._decode_at(item, index, element, module, env)
            for index, (item, element) in enumerate(zip(items, node.elements))
        )

    def _decode_list(self, value: Any, node: ListNode, module: str, env: Environment) -> list:
        if not isinstance(value, list):
            raise ConvertError(node.describe(), value)
        if node.shape == ListShape.TYPED:
            return [
                self._decode_at(item, index, node.element, module, env)
                for index, item in enumerate(value)
            ]
        if node.shape == ListShape.EMPTY and value:
            raise ConvertError(node.describe(), value)
        return value

    def _decode_map(self, value: Any, node: MapNode, module: str, env: Environment) -> Any:
        if not isinstance(value, Mapping):
            raise ConvertError(node.describe(), value)
        if node.shape == MapShape.ANY:
            return value
        if node.shape == MapShape.EMPTY:
            if value:
                raise ConvertError(node.describe(), value)
            return value
        if node.shape == MapShape.HOMOGENEOUS:
            result = {}
            for key, item in value.items():
                segment = _segment(key)
                decoded_key = self._decode_at(key, segment, node.key, module, env)
                result[decoded_key] = self._decode_at(item, segment, node.value, module, env)
            return result

        result = {}
        for spec in node.fields:
            raw = lookup_field(value, spec.key)
            if raw is not _MISSING:
                result[spec.key] = self._decode_at(raw, spec.key.name, spec.type, module, env)
            elif spec.required:
                raise ConvertError(
                    node.describe(), value, f"missing required key: {spec.key}"
                )
        return result

    def _decode_record(self, value: Any, node: RecordNode, module: str, env: Environment) -> Any:
        if not isinstance(value, Mapping):
            raise ConvertError(node.describe(), value)
        if node.name is None:
            return value if isinstance(value, Record) else _normalize_keys(value)

        fields = {}
        for spec in node.fields:
            raw = lookup_field(value, spec.key)
            if raw is _MISSING:
                fields[spec.key] = copy.deepcopy(spec.default)
            else:
                fields[spec.key] = self._decode_at(raw, spec.key.name, spec.type, module, env)
        return Record(node.name, fields)

    def _decode_union(self, value: Any, node: UnionNode, module: str, env: Environment) -> Any:
        for member in node.members:
            result, error = self.attempt(value, member, module, env)
            if error is None:
                return result
        raise ConvertError(f"union of {node.describe()}", value)

    # ------------------------------------------------------------------
    # Named types and variables
    # ------------------------------------------------------------------

    def _decode_ref(self, value: Any, node: RefNode, module: str, env: Environment) -> Any:
        if node.module is not None:
            converter = converter_for(node.module, node.name)
            if converter is not None:
                return converter(value)
        bindings = [Binding(module, arg, env) for arg in node.args]
        return self.instantiate(value, node.module or module, node.name, bindings)

    def _decode_var(self, value: Any, node: VarNode, module: str, env: Environment) -> Any:
        binding = env.get(node.token)
        if binding is None:
            raise UnboundTypeVariable(node.token)
        return self.decode_node(value, binding.node, binding.module, binding.env)


__all__ = ["DEFAULT_TYPE", "Decoder", "lookup_field"]
