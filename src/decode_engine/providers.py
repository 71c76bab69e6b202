"""Schema providers: where a module's type catalog comes from."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .manifest_loader import find_schema_manifest, load_schema_manifest
from .schemas.catalog import TypeEntry

logger = logging.getLogger(__name__)


class SchemaProvider(ABC):
    """Source of type catalogs, one per module."""

    @abstractmethod
    def fetch_type_catalog(self, module: str) -> Optional[List[TypeEntry]]:
        """Return every type entry declared by ``module``.

        Returns:
            The module's entries, or None if the module has no catalog.
        """

    def has_module(self, module: str) -> bool:
        return self.fetch_type_catalog(module) is not None


class InMemorySchemaProvider(SchemaProvider):
    """Provider over catalogs registered from Python code."""

    def __init__(self, modules: Optional[Dict[str, Iterable[TypeEntry]]] = None):
        self._modules: Dict[str, List[TypeEntry]] = {}
        self._lock = threading.Lock()
        for name, entries in (modules or {}).items():
            self.register(name, entries)

    def register(self, module: str, entries: Iterable[TypeEntry]) -> None:
        """Register (or replace) the catalog of ``module``."""
        with self._lock:
            self._modules[module] = list(entries)

    def fetch_type_catalog(self, module: str) -> Optional[List[TypeEntry]]:
        entries = self._modules.get(module)
        return list(entries) if entries is not None else None

    def has_module(self, module: str) -> bool:
        return module in self._modules


class ManifestSchemaProvider(SchemaProvider):
    """Provider reading ``<module>.yaml`` manifests from schema directories.

    Directories are searched in order; the first manifest found wins.
    """

    def __init__(self, schema_dirs: Sequence[Union[str, Path]]):
        self.schema_dirs = [Path(d) for d in schema_dirs]

    def fetch_type_catalog(self, module: str) -> Optional[List[TypeEntry]]:
        path = find_schema_manifest(self.schema_dirs, module)
        if path is None:
            return None
        manifest = load_schema_manifest(path, module)
        logger.debug("Loaded manifest for module %s from %s", module, path)
        return list(manifest.types)

    def has_module(self, module: str) -> bool:
        return find_schema_manifest(self.schema_dirs, module) is not None


class ChainedSchemaProvider(SchemaProvider):
    """Ask each provider in turn; the first that knows the module answers."""

    def __init__(self, providers: Sequence[SchemaProvider]):
        self.providers = list(providers)

    def fetch_type_catalog(self, module: str) -> Optional[List[TypeEntry]]:
        for provider in self.providers:
            entries = provider.fetch_type_catalog(module)
            if entries is not None:
                return entries
        return None

    def has_module(self, module: str) -> bool:
        return any(provider.has_module(module) for provider in self.providers)


__all__ = [
    "ChainedSchemaProvider",
    "InMemorySchemaProvider",
    "ManifestSchemaProvider",
    "SchemaProvider",
]
