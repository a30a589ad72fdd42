"""Collaborators of the graph engine: runtime introspection, source parsing, registries."""

from builderdocs.introspection.registry import EntryPointRegistry, FactoryRegistry, StaticRegistry
from builderdocs.introspection.source import SourceIndex, parse_docstring
from builderdocs.introspection.structure import public_methods, supertypes, type_name

__all__ = [
    "EntryPointRegistry",
    "FactoryRegistry",
    "StaticRegistry",
    "SourceIndex",
    "parse_docstring",
    "public_methods",
    "supertypes",
    "type_name",
]
