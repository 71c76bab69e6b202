"""Engine configuration schema (``decode_engine.yaml``)."""

from __future__ import annotations

from typing import List

from pydantic import Field

from .base import SchemaBase


class EngineConfig(SchemaBase):
    """Declarative engine settings.

    Fields:
        schema_dirs: Directories searched for ``<module>.yaml`` manifests,
            relative to the config directory unless absolute.
        default_type: Type name used when a caller does not name one.
        preload: Modules whose catalogs are loaded at start-up.
    """

    schema_dirs: List[str] = Field(default_factory=lambda: ["schemas"])
    default_type: str = Field(default="t", min_length=1)
    preload: List[str] = Field(default_factory=list)
