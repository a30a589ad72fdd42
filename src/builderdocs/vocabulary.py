"""
Builder Vocabulary
==================

The small set of builder shapes the reference generator understands.

A documented API derives its builders from these classes. The classifier
looks at a method's return type and decides, by subclass relationship with
one of the classes below, how the property should be documented.

Projects documenting their own API can substitute their own base classes
through the ``vocabulary`` configuration section (dotted paths).
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Generic, Optional, TypeVar

logger = logging.getLogger("builderdocs.vocabulary")


class VocabularyError(Exception):
    """Raised when a builder claims a shape but lacks the shape's accessor."""


class Locator:
    """Position of a builder within the scenario being built."""


class BaseSequenceBuilder:
    """Ordered list of steps. Documented through the step catalog, never inlined."""

    def step(self, builder: "StepBuilder") -> "BaseSequenceBuilder":
        raise NotImplementedError


class StepBuilder:
    """Builder of a single step."""


class ListBuilder:
    """List of plain string values."""

    def next_item(self, item: str) -> None:
        raise NotImplementedError


class MappingListBuilder:
    """List of mappings; every mapping is configured by the builder returned from ``add_item``."""

    def add_item(self) -> Any:
        raise NotImplementedError


class PairBuilder:
    """Arbitrary key-value pairs."""

    def accept(self, key: str, value: Any) -> None:
        raise NotImplementedError

    class OfString:
        """Key-value pairs with string values."""

        def accept(self, key: str, value: str) -> None:
            raise NotImplementedError

    class OfDouble:
        """Key-value pairs with numeric values."""

        def accept(self, key: str, value: float) -> None:
            raise NotImplementedError


class PartialBuilder:
    """Builder selected by a key; ``with_key`` returns the builder for that key."""

    def with_key(self, key: str) -> Any:
        raise NotImplementedError


class ServiceLoadedFactory:
    """Factory of a pluggable builder, registered under ``group``."""

    group: ClassVar[str] = ""

    def name(self) -> str:
        raise NotImplementedError

    def accepts_param(self) -> bool:
        return False

    def new_builder(self, locator: Locator, param: str) -> Any:
        raise NotImplementedError


class StepBuilderFactory(ServiceLoadedFactory):
    """Factory of step builders."""

    group = "builderdocs.steps"


class ActionBuilderFactory(ServiceLoadedFactory):
    """Factory of action builders."""

    group = "builderdocs.actions"


class ProcessorBuilderFactory(ServiceLoadedFactory):
    """Factory of processor builders."""

    group = "builderdocs.processors"


class HttpProcessorBuilderFactory(ProcessorBuilderFactory):
    """Factory of processors specific to HTTP responses."""

    group = "builderdocs.http_processors"


F = TypeVar("F", bound=ServiceLoadedFactory)


class ServiceLoadedBuilderProvider(Generic[F]):
    """Selects one of the builders registered for factory kind ``F`` by name."""


# Vocabulary fields that may be overridden from configuration
_FIELDS = (
    "locator",
    "base_sequence_builder",
    "step_builder",
    "list_builder",
    "mapping_list_builder",
    "pair_builder",
    "partial_builder",
    "service_loaded_factory",
    "service_loaded_builder_provider",
    "step_factory",
    "action_factory",
    "processor_factory",
)


def import_dotted(path: str) -> Any:
    """Import ``package.module.Attr`` (nested attributes allowed)."""
    parts = path.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj = importlib.import_module(module_name)
        except ImportError:
            continue
        for attr in parts[split:]:
            obj = getattr(obj, attr)
        return obj
    raise ImportError(f"Cannot import {path!r}")


@dataclass
class Vocabulary:
    """The concrete classes standing for each builder shape in one run."""

    locator: type = Locator
    base_sequence_builder: type = BaseSequenceBuilder
    step_builder: type = StepBuilder
    list_builder: type = ListBuilder
    mapping_list_builder: type = MappingListBuilder
    pair_builder: type = PairBuilder
    partial_builder: type = PartialBuilder
    service_loaded_factory: type = ServiceLoadedFactory
    service_loaded_builder_provider: type = ServiceLoadedBuilderProvider
    step_factory: type = StepBuilderFactory
    action_factory: type = ActionBuilderFactory
    processor_factory: type = ProcessorBuilderFactory
    pair_variants: tuple = (PairBuilder.OfString, PairBuilder.OfDouble)
    links: Dict[type, str] = field(default_factory=lambda: {
        ActionBuilderFactory: "index.html#actions",
        ProcessorBuilderFactory: "index.html#processors",
        HttpProcessorBuilderFactory: "index.html#processors",
    })

    @property
    def pair_builders(self) -> tuple:
        return (self.pair_builder, *self.pair_variants)

    @property
    def opaque(self) -> frozenset:
        """Shape base classes that never get a documentation node of their own."""
        return frozenset((
            self.base_sequence_builder,
            self.list_builder,
            self.mapping_list_builder,
            self.partial_builder,
            *self.pair_builders,
        ))

    def link_for(self, factory_kind: type) -> Optional[str]:
        return self.links.get(factory_kind)

    @classmethod
    def from_config(cls, config: dict) -> "Vocabulary":
        """Build a vocabulary from the ``vocabulary`` and ``links`` config sections."""
        overrides = {}
        for key, path in (config.get("vocabulary") or {}).items():
            if key not in _FIELDS:
                raise VocabularyError(f"Unknown vocabulary entry {key!r}")
            overrides[key] = import_dotted(path)
        vocabulary = cls(**overrides)
        links = config.get("links")
        if links is not None:
            vocabulary.links = {}
            for path, target in links.items():
                try:
                    vocabulary.links[import_dotted(path)] = target
                except (ImportError, AttributeError) as e:
                    logger.warning(f"Ignoring link for {path}: {e}")
        return vocabulary
