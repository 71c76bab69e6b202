"""Loaders for engine and schema manifests (YAML)."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml
from pydantic import ValidationError

from .exceptions import ManifestLoadError, SchemaValidationError
from .schemas.catalog import SchemaManifest
from .schemas.config import EngineConfig

logger = logging.getLogger(__name__)

ENGINE_MANIFEST = "decode_engine.yaml"
SCHEMA_SUFFIXES = (".yaml", ".yml")

_MODULE_NAME = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$")


def _read_yaml(path: Path, file_name: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ManifestLoadError(file_name, f"Invalid YAML: {e}")
    except OSError as e:
        raise ManifestLoadError(file_name, str(e))


def _field_path(error: Dict[str, Any]) -> str:
    path = ""
    for part in error.get("loc", ()):
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<root>"


def _validation_failure(file_name: str, exc: ValidationError) -> SchemaValidationError:
    first = exc.errors()[0]
    return SchemaValidationError(file_name, _field_path(first), first.get("msg", str(exc)))


def load_engine_manifest(config_dir: str) -> Optional[Dict]:
    """Load decode_engine.yaml (optional)."""
    path = Path(config_dir) / ENGINE_MANIFEST
    if not path.exists():
        return None
    data = _read_yaml(path, ENGINE_MANIFEST)
    if data is not None and not isinstance(data, dict):
        raise ManifestLoadError(ENGINE_MANIFEST, "Expected a mapping at top level")
    return data


def parse_engine_config(data: Optional[Dict], file_name: str = ENGINE_MANIFEST) -> EngineConfig:
    """Validate engine manifest data; missing data yields the defaults."""
    try:
        return EngineConfig.model_validate(data or {})
    except ValidationError as e:
        raise _validation_failure(file_name, e)


def find_schema_manifest(schema_dirs: Iterable[Path], module: str) -> Optional[Path]:
    """Locate ``<module>.yaml`` (or ``.yml``) in the first directory that has it.

    Module names that are not plain file stems are never resolved to a path.
    """
    if not _MODULE_NAME.match(module) or ".." in module:
        logger.debug("Refusing to resolve manifest for module name %r", module)
        return None
    for schema_dir in schema_dirs:
        for suffix in SCHEMA_SUFFIXES:
            candidate = Path(schema_dir) / f"{module}{suffix}"
            if candidate.is_file():
                return candidate
    return None


def load_schema_manifest(path: Path, module: Optional[str] = None) -> SchemaManifest:
    """Load and validate one module manifest.

    Args:
        path: Manifest file.
        module: Module the manifest is expected to describe; checked against
            the manifest's own ``module`` field when that is present.

    Raises:
        ManifestLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the contents do not form a valid manifest.
    """
    file_name = path.name
    data = _read_yaml(path, file_name)
    if data is None:
        raise ManifestLoadError(file_name, "Empty file")
    if not isinstance(data, dict):
        raise ManifestLoadError(file_name, "Expected a mapping at top level")
    try:
        manifest = SchemaManifest.model_validate(data)
    except ValidationError as e:
        raise _validation_failure(file_name, e)
    if module is not None and manifest.module is not None and manifest.module != module:
        raise SchemaValidationError(
            file_name, "module", f"Expected module '{module}', got '{manifest.module}'"
        )
    return manifest


__all__ = [
    "ENGINE_MANIFEST",
    "find_schema_manifest",
    "load_engine_manifest",
    "load_schema_manifest",
    "parse_engine_config",
]
