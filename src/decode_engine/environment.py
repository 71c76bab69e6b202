"""Parameter environments for generic type instantiation."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple, Sequence

from .schemas.nodes import TypeNode

Environment = Mapping[str, "Binding"]

EMPTY_ENVIRONMENT: Environment = MappingProxyType({})


class Binding(NamedTuple):
    """A type argument together with the scope it was written in.

    ``module`` and ``env`` are those of the referring site, so a variable
    bound to another variable or to a local reference resolves where the
    argument was written, not where it is used.
    """

    module: str
    node: TypeNode
    env: Environment


def bind(params: Sequence[str], args: Sequence[Binding]) -> Environment:
    """Zip declared parameter tokens against bound arguments."""
    return MappingProxyType(dict(zip(params, args)))


__all__ = ["Binding", "EMPTY_ENVIRONMENT", "Environment", "bind"]
