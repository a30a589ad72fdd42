"""
Factory Registries
==================

Resolve the registered implementations of a pluggable factory kind.

``EntryPointRegistry`` reads the entry-point group declared by the factory
kind (``kind.group``); every entry point names a factory class that is
instantiated without arguments. ``StaticRegistry`` holds explicit factory
instances and is what embedding code and tests use.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import Dict, Iterable, List

logger = logging.getLogger("builderdocs.introspection.registry")


class FactoryRegistry:
    """Ordered implementations of a factory kind."""

    def implementations(self, kind: type) -> List[object]:
        raise NotImplementedError


class StaticRegistry(FactoryRegistry):
    """In-memory registry: factory kind -> factory instances, in registration order."""

    def __init__(self, factories: Iterable[object] = ()):
        self._factories: List[object] = []
        for factory in factories:
            self.register(factory)

    def register(self, factory: object) -> None:
        self._factories.append(factory)

    def implementations(self, kind: type) -> List[object]:
        return [f for f in self._factories if isinstance(f, kind)]


class EntryPointRegistry(FactoryRegistry):
    """Registry backed by installed distributions' entry points."""

    def __init__(self):
        self._cache: Dict[type, List[object]] = {}

    def implementations(self, kind: type) -> List[object]:
        if kind in self._cache:
            return self._cache[kind]
        group = getattr(kind, "group", "")
        factories: List[object] = []
        if not group:
            logger.warning(f"Factory kind {kind.__qualname__} declares no entry-point group")
        else:
            for ep in entry_points(group=group):
                try:
                    factory = ep.load()()
                except Exception as e:
                    logger.error(f"Cannot load factory {ep.name} from {ep.value}: {e}")
                    continue
                if not isinstance(factory, kind):
                    logger.warning(f"Entry point {ep.name} in {group} is not a {kind.__qualname__}, skipping")
                    continue
                factories.append(factory)
            logger.debug(f"Found {len(factories)} factories in group {group}")
        self._cache[kind] = factories
        return factories
