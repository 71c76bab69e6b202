"""Engine façade: catalog, decoder and configuration wired together."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from .catalog import TypeCatalog
from .decoder import DEFAULT_TYPE, Decoder
from .exceptions import DecodeEngineError
from .manifest_loader import ENGINE_MANIFEST, load_engine_manifest, parse_engine_config
from .providers import ManifestSchemaProvider, SchemaProvider
from .schemas.config import EngineConfig
from .schemas.nodes import TypeNode

logger = logging.getLogger(__name__)

SCHEMA_PATH_ENV_VAR = "DECODE_ENGINE_SCHEMA_PATH"


def resolve_schema_dirs(config_dir: str, config: EngineConfig) -> List[Path]:
    """Return the schema directories for a config directory.

    Priority:
        1. Directories listed in DECODE_ENGINE_SCHEMA_PATH (os.pathsep separated).
        2. ``schema_dirs`` from decode_engine.yaml, relative to the config directory.
    """
    base = Path(config_dir).resolve()
    dirs: List[Path] = []
    env_path = os.getenv(SCHEMA_PATH_ENV_VAR)
    if env_path:
        dirs.extend(Path(p).expanduser().resolve() for p in env_path.split(os.pathsep) if p)
    for entry in config.schema_dirs:
        path = Path(entry).expanduser()
        dirs.append(path if path.is_absolute() else base / path)
    return dirs


class DecodeEngine:
    """Entry point for decoding values against a schema catalog.

    Example:
        engine = DecodeEngine.from_config_dir("config/")
        film, err = engine.decode(payload, "filmography")
    """

    def __init__(self, provider: SchemaProvider, default_type: str = DEFAULT_TYPE):
        self.catalog = TypeCatalog(provider)
        self.decoder = Decoder(self.catalog, default_type=default_type)

    @classmethod
    def from_config_dir(cls, path: str) -> "DecodeEngine":
        """Build an engine from a config directory.

        Initialization sequence:
        1. Load decode_engine.yaml (optional; defaults apply when absent)
        2. Resolve schema directories (env override first)
        3. Construct the manifest provider, catalog and decoder
        4. Preload the catalogs listed under ``preload``

        Raises:
            ManifestLoadError: If a manifest cannot be read or parsed.
            SchemaValidationError: If a manifest is invalid.
            SchemaNotFound: If a preloaded module has no manifest.
        """
        config = parse_engine_config(load_engine_manifest(path), ENGINE_MANIFEST)
        schema_dirs = resolve_schema_dirs(path, config)
        engine = cls(ManifestSchemaProvider(schema_dirs), default_type=config.default_type)
        for module in config.preload:
            engine.catalog.load_types(module)
        logger.info(
            "Decode engine ready: %d schema dir(s), %d module(s) preloaded",
            len(schema_dirs),
            len(config.preload),
        )
        return engine

    def decode(
        self,
        value: Any,
        module: str,
        name: Optional[str] = None,
        args: Sequence[TypeNode] = (),
    ) -> Tuple[Any, Optional[DecodeEngineError]]:
        return self.decoder.decode(value, module, name, args)

    def decode_or_raise(
        self,
        value: Any,
        module: str,
        name: Optional[str] = None,
        args: Sequence[TypeNode] = (),
    ) -> Any:
        return self.decoder.decode_or_raise(value, module, name, args)

    def get_catalog(self) -> TypeCatalog:
        return self.catalog


__all__ = ["DecodeEngine", "SCHEMA_PATH_ENV_VAR", "resolve_schema_dirs"]
