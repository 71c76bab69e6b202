"""Decode Engine package root.

The public API surface is the DecodeEngine façade, the Decoder/TypeCatalog
pair it wires together, the schema providers, the schema types exposed in
``decode_engine.schemas`` and the value types (Symbol, Record).
"""

__version__ = "0.1.0"

from decode_engine.catalog import TypeCatalog  # noqa: F401
from decode_engine.decoder import DEFAULT_TYPE, Decoder  # noqa: F401
from decode_engine.engine import DecodeEngine  # noqa: F401
from decode_engine.exceptions import (  # noqa: F401
    ConvertError,
    DecodeEngineError,
    ManifestLoadError,
    SchemaNotFound,
    SchemaValidationError,
    TypeNotFound,
    UnboundTypeVariable,
)
from decode_engine.providers import (  # noqa: F401
    ChainedSchemaProvider,
    InMemorySchemaProvider,
    ManifestSchemaProvider,
    SchemaProvider,
)
from decode_engine.symbols import Symbol, sym  # noqa: F401
from decode_engine.values import Record  # noqa: F401
from decode_engine.schemas import *  # noqa: F401,F403
from decode_engine.schemas import __all__ as SCHEMA_EXPORTS

__all__ = [
    "__version__",
    "DEFAULT_TYPE",
    "DecodeEngine",
    "Decoder",
    "TypeCatalog",
    "ConvertError",
    "DecodeEngineError",
    "ManifestLoadError",
    "SchemaNotFound",
    "SchemaValidationError",
    "TypeNotFound",
    "UnboundTypeVariable",
    "ChainedSchemaProvider",
    "InMemorySchemaProvider",
    "ManifestSchemaProvider",
    "SchemaProvider",
    "Symbol",
    "sym",
    "Record",
] + SCHEMA_EXPORTS
