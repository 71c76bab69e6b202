"""Type catalog: memoized resolution of named types.

The catalog asks its provider for a module's entries the first time the
module is referenced and keeps the indexed result for its own lifetime.
Lookups of cached modules take no lock. A first lookup takes a per-module
lock, so concurrent first lookups of one module extract it once and all
observe the same cached mapping. Failed extractions are not cached.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Dict, Mapping

from .exceptions import SchemaNotFound, TypeNotFound
from .providers import SchemaProvider
from .schemas.catalog import TypeEntry

logger = logging.getLogger(__name__)


class TypeCatalog:
    """Resolve ``(module, name)`` to a ``TypeEntry``."""

    def __init__(self, provider: SchemaProvider):
        self.provider = provider
        self._cache: Dict[str, Mapping[str, TypeEntry]] = {}
        self._lock = threading.Lock()
        self._module_locks: Dict[str, threading.Lock] = {}

    def load_types(self, module: str) -> Mapping[str, TypeEntry]:
        """Return the module's entries indexed by name.

        Raises:
            SchemaNotFound: If the provider has no catalog for the module.
        """
        types = self._cache.get(module)
        if types is not None:
            return types

        with self._lock:
            module_lock = self._module_locks.setdefault(module, threading.Lock())

        with module_lock:
            types = self._cache.get(module)
            if types is None:
                types = self._extract(module)
                self._cache[module] = types
        return types

    def _extract(self, module: str) -> Mapping[str, TypeEntry]:
        entries = self.provider.fetch_type_catalog(module)
        if entries is None:
            raise SchemaNotFound(module)
        indexed: Dict[str, TypeEntry] = {}
        for entry in entries:
            if entry.name in indexed:
                logger.warning(
                    "Module %s declares type %s more than once; keeping the last definition",
                    module,
                    entry.name,
                )
            indexed[entry.name] = entry
        logger.debug("Cached %d types for module %s", len(indexed), module)
        return MappingProxyType(indexed)

    def resolve(self, module: str, name: str) -> TypeEntry:
        """Look up a named type.

        Raises:
            SchemaNotFound: If the module has no catalog.
            TypeNotFound: If the module has no type with that name.
        """
        entry = self.load_types(module).get(name)
        if entry is None:
            raise TypeNotFound(module, name)
        return entry

    def has_module(self, module: str) -> bool:
        """True if the module is cached or its provider knows it."""
        return module in self._cache or self.provider.has_module(module)

    def is_cached(self, module: str) -> bool:
        return module in self._cache

    def clear(self) -> None:
        """Drop every cached module."""
        with self._lock:
            self._cache.clear()
            self._module_locks.clear()


__all__ = ["TypeCatalog"]
