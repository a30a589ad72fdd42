"""
builderdocs: Reference Documentation for Fluent Builder APIs
============================================================

Correlates runtime introspection of a builder API with the docstrings in its
source, builds a deduplicated graph of documented builder types and renders
it as linked markdown tables.

Core modules:
- vocabulary: Builder shape base classes and the VocabularyError
- models: Pydantic records of methods and declarations, the Docs node
- matcher: Structural method -> source declaration correlation
- classifier: Return-type categories and excluded plumbing methods
- graph: networkx arena of documented types (memoization, cycles)
- generator: DocGraphBuilder and ReferenceGenerator
- flatten: Breadth-first naming of shared sub-nodes
- config: YAML configuration loader with defaults

Sub-packages:
- introspection: Structural introspection, ast source parser, factory registries
- documentation: Markdown renderer
"""

from builderdocs.config import load_config
from builderdocs.models import (
    ClassSyntax,
    DocComment,
    Docs,
    MethodDescriptor,
    Section,
    SyntaxMethod,
)
from builderdocs.vocabulary import Vocabulary, VocabularyError
from builderdocs.matcher import find_matching
from builderdocs.classifier import BuilderCategory, classify, is_excluded
from builderdocs.graph import DocGraph
from builderdocs.generator import DocGraphBuilder, Reference, ReferenceGenerator
from builderdocs.flatten import Flattener, Flattening, flatten
from builderdocs.introspection import EntryPointRegistry, SourceIndex, StaticRegistry
from builderdocs.documentation import MarkdownRenderer

__all__ = [
    # Config
    "load_config",
    # Models
    "ClassSyntax",
    "DocComment",
    "Docs",
    "MethodDescriptor",
    "Section",
    "SyntaxMethod",
    # Vocabulary
    "Vocabulary",
    "VocabularyError",
    # Engine
    "find_matching",
    "BuilderCategory",
    "classify",
    "is_excluded",
    "DocGraph",
    "DocGraphBuilder",
    "Reference",
    "ReferenceGenerator",
    "Flattener",
    "Flattening",
    "flatten",
    # Collaborators
    "EntryPointRegistry",
    "SourceIndex",
    "StaticRegistry",
    # Output
    "MarkdownRenderer",
]
