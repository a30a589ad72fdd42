"""
Reference Generator
===================

Builds the documentation graph of a builder API.

``DocGraphBuilder.describe`` creates one ``Docs`` node per builder type,
memoized in a ``DocGraph`` arena. A node is recorded in the arena before its
methods are visited, so a builder reachable from itself finds its own
half-built node instead of recursing forever.

``ReferenceGenerator`` drives the builder from the roots of the reference:
the step catalog, the registered step factories, and the action and
processor registries.

Usage:
    builder = DocGraphBuilder(SourceIndex(["src"]), EntryPointRegistry())
    reference = ReferenceGenerator(builder, catalog=StepCatalog).collect()
"""

from __future__ import annotations

import logging
import re
import typing
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from requests.structures import CaseInsensitiveDict

from builderdocs.classifier import (
    ANY_KEY,
    LIST_OF_MAPPINGS,
    LIST_OF_STEPS,
    LIST_OF_STRINGS,
    BuilderCategory,
    classify,
    is_excluded,
)
from builderdocs.graph import DocGraph
from builderdocs.introspection.registry import FactoryRegistry
from builderdocs.introspection.source import SourceIndex
from builderdocs.introspection.structure import (
    describe_function,
    is_enum,
    origin_class,
    public_methods,
    supertypes,
    type_name,
)
from builderdocs.matcher import find_matching, matches
from builderdocs.models import ClassSyntax, Docs, MethodDescriptor, SyntaxMethod
from builderdocs.vocabulary import Vocabulary, VocabularyError

logger = logging.getLogger("builderdocs.generator")

NO_VALUE_NOTE = "Note: property does not have any value"


def first_line(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return re.sub(r"(\n|<br>).*", "", text, count=1, flags=re.DOTALL)


class DocGraphBuilder:
    """Describes builder types into ``Docs`` nodes, one node per type per run.

    Args:
        sources: Parsed source files of the documented API.
        registry: Resolver of factory implementations.
        vocabulary: Builder shape classes (defaults to ``builderdocs.vocabulary``).
        graph: Arena to record nodes in; a fresh one by default.
    """

    def __init__(
        self,
        sources: SourceIndex,
        registry: FactoryRegistry,
        vocabulary: Optional[Vocabulary] = None,
        graph: Optional[DocGraph] = None,
    ):
        self.sources = sources
        self.registry = registry
        self.vocabulary = vocabulary or Vocabulary()
        self.graph = graph if graph is not None else DocGraph()
        self._in_progress: set = set()
        self._handlers: Dict[BuilderCategory, Callable[[type, MethodDescriptor, type, Docs], None]] = {
            BuilderCategory.PAIR: self._add_pair,
            BuilderCategory.PARTIAL: self._add_partial,
            BuilderCategory.SEQUENCE: self._add_sequence,
            BuilderCategory.LIST_OF_STRINGS: self._add_list_of_strings,
            BuilderCategory.LIST_OF_MAPPINGS: self._add_list_of_mappings,
            BuilderCategory.PLUGIN_REGISTRY: self._add_plugin_registry,
            BuilderCategory.NESTED_BUILDER: self._add_nested_builder,
        }

    # ── source lookups ──────────────────────────────────────────────────

    def find_class(self, cls: type) -> Optional[ClassSyntax]:
        if cls in self.vocabulary.opaque:
            return None
        return self.sources.find_class(cls)

    def find_all_methods(self, cls: type) -> List[SyntaxMethod]:
        """Method declarations of ``cls`` and its supertypes, most derived first."""
        declarations: List[SyntaxMethod] = []
        for klass in [cls, *supertypes(cls)]:
            if klass in self.vocabulary.opaque or klass is typing.Generic:
                continue
            cd = self.find_class(klass)
            if cd is not None:
                declarations.extend(cd.methods)
        return declarations

    def _accessor(self, cls: type, name: str, parameter_count: int) -> MethodDescriptor:
        for method in public_methods(cls):
            if method.name == name and method.parameter_count == parameter_count:
                return method
        raise VocabularyError(f"{type_name(cls)} has no {name}() accessor with {parameter_count} parameter(s)")

    def _accessor_description(self, cls: type, name: str, parameter_count: int, inner: Docs) -> None:
        if self.find_class(cls) is None:
            return
        for declaration in self.find_all_methods(cls):
            if declaration.name == name and declaration.parameter_count == parameter_count:
                inner.owner_description = declaration.description
                return
        inner.owner_description = None

    # ── graph construction ──────────────────────────────────────────────

    def describe(self, builder: type) -> Optional[Docs]:
        """The node of ``builder``, or None if it has no source declaration."""
        cached = self.graph.get(builder)
        if cached is not None:
            return cached
        cd = self.find_class(builder)
        if cd is None:
            return None

        declarations = self.find_all_methods(builder)
        docs = Docs(type_description=cd.description)
        self.graph.add(builder, docs)
        if issubclass(builder, self.vocabulary.base_sequence_builder):
            return docs

        self._in_progress.add(builder)
        try:
            for method in public_methods(builder):
                if is_excluded(method, builder, self.vocabulary):
                    continue
                param = self.describe_method(builder, method, find_matching(declarations, method))
                if param is not None:
                    docs.add_param(method.name, param)
        finally:
            self._in_progress.discard(builder)
        return docs

    def describe_method(
        self, builder: type, method: MethodDescriptor, declaration: Optional[SyntaxMethod]
    ) -> Optional[Docs]:
        """The node documenting property ``method`` of ``builder``, or None if it describes nothing."""
        description = declaration.description if declaration is not None else None
        categories = classify(method, builder, self.vocabulary)
        if categories == [BuilderCategory.SELF_RETURN]:
            return self._describe_self_return(method, description)

        param = Docs.of(description)
        returned = origin_class(method.return_type)
        for category in categories:
            self._handlers[category](builder, method, returned, param)
        if not param.params and not self._shares_pending(param):
            return None
        return param

    def _shares_pending(self, param: Docs) -> bool:
        """Whether ``param`` shares the property table of a node still being built."""
        return any(param.params is self.graph.get(t).params for t in self._in_progress)

    def _describe_self_return(self, method: MethodDescriptor, description: Optional[str]) -> Docs:
        text = description or ""
        if method.parameter_count == 0:
            text = f"{text}<br>{NO_VALUE_NOTE}" if text else NO_VALUE_NOTE
        elif method.parameter_count == 1 and is_enum(method.param_types[0]):
            text += self._enum_options(method.param_types[0])
        return Docs.of(text or None)

    def _enum_options(self, enum_cls: type) -> str:
        cd = self.find_class(enum_cls)
        if cd is None:
            return ""
        constants = [(c.name, c.description) for c in cd.constants]
        if not constants:
            constants = [(name, None) for name in enum_cls.__members__]
        if not constants:
            return ""
        parts = ["<br>Options:{::nomarkdown}<ul>"]
        for name, option in constants:
            parts.append(f"<li><code>{name}</code>")
            if option is not None:
                parts.append(": {:/}" + option + "{::nomarkdown}")
            parts.append("</li>")
        parts.append("</ul>{:/}")
        return "".join(parts)

    def _add_pair(self, builder: type, method: MethodDescriptor, returned: type, param: Docs) -> None:
        inner = self.describe(returned)
        if inner is None:
            logger.debug(f"Pair builder {type_name(returned)} is not documented")
            return
        self._accessor_description(returned, "accept", 2, inner)
        param.add_param(ANY_KEY, inner)
        self.graph.add_dependency(builder, returned, method.name)

    def _add_partial(self, builder: type, method: MethodDescriptor, returned: type, param: Docs) -> None:
        accessor = self._accessor(returned, "with_key", 1)
        inner_cls = origin_class(accessor.return_type)
        if inner_cls is None:
            raise VocabularyError(f"{type_name(returned)}.with_key() has no resolvable return type")
        inner = self.describe(inner_cls)
        if inner is None:
            logger.debug(f"Keyed builder {type_name(inner_cls)} is not documented")
            return
        self._accessor_description(returned, "with_key", 1, inner)
        param.add_param(ANY_KEY, inner)
        self.graph.add_dependency(builder, inner_cls, method.name)

    def _add_sequence(self, builder: type, method: MethodDescriptor, returned: type, param: Docs) -> None:
        param.add_param(LIST_OF_STEPS, Docs())

    def _add_list_of_strings(self, builder: type, method: MethodDescriptor, returned: type, param: Docs) -> None:
        inner = self.describe(returned)
        param.add_param(LIST_OF_STRINGS, Docs.of(inner.type_description if inner is not None else None))

    def _add_list_of_mappings(self, builder: type, method: MethodDescriptor, returned: type, param: Docs) -> None:
        accessor = self._accessor(returned, "add_item", 0)
        item_cls = origin_class(accessor.return_type)
        if item_cls is None:
            raise VocabularyError(f"{type_name(returned)}.add_item() has no resolvable return type")
        inner = self.describe(item_cls)
        if inner is None:
            logger.debug(f"Mapping builder {type_name(item_cls)} is not documented")
            return
        self._accessor_description(returned, "add_item", 0, inner)
        param.add_param(LIST_OF_MAPPINGS, inner)
        self.graph.add_dependency(builder, item_cls, method.name)

    def _add_plugin_registry(self, builder: type, method: MethodDescriptor, returned: type, param: Docs) -> None:
        args = typing.get_args(method.return_type)
        kind = origin_class(args[-1]) if args else None
        if kind is None or not issubclass(kind, self.vocabulary.service_loaded_factory):
            raise VocabularyError(
                f"{type_name(builder)}.{method.name}() returns an unparameterized {type_name(returned)}"
            )
        link = self.vocabulary.link_for(kind)
        if link is not None:
            param.link = link
        param.add_params(self.implementations(kind).params)
        self.graph.add_dependency(builder, kind, method.name)

    def _add_nested_builder(self, builder: type, method: MethodDescriptor, returned: type, param: Docs) -> None:
        inner = self.describe(returned)
        if inner is None:
            return
        param.type_description = inner.type_description
        if returned in self._in_progress and not param.params:
            # half-built: share the table so the back-reference sees the final properties
            param.params = inner.params
        else:
            param.add_params(inner.params)
        self.graph.add_dependency(builder, returned, method.name)

    def describe_property(self, builder: type, method: MethodDescriptor) -> Optional[Docs]:
        """Describe one method of ``builder``, looking its declaration up first."""
        return self.describe_method(builder, method, find_matching(self.find_all_methods(builder), method))

    # ── registries ──────────────────────────────────────────────────────

    def factory_builder(self, factory: object) -> type:
        """Builder class constructed by ``factory.new_builder``."""
        new_builder = getattr(type(factory), "new_builder", None)
        if new_builder is None:
            raise VocabularyError(f"{type_name(type(factory))} has no new_builder()")
        descriptor = describe_function(new_builder, type(factory))
        builder = origin_class(descriptor.return_type)
        if builder is None:
            raise VocabularyError(f"{type_name(type(factory))}.new_builder() has no resolvable return type")
        return builder

    def find_inline_param_docs(self, factory_cls: type) -> Optional[str]:
        """Docs of the inline string parameter of ``factory_cls.new_builder``."""
        cd = self.find_class(factory_cls)
        if cd is None:
            return None
        for declaration in cd.methods:
            if matches(declaration, "new_builder", self.vocabulary.locator, str):
                return declaration.param_docs.get(declaration.param_names[1])
        return None

    def implementations(self, kind: type) -> Docs:
        """Node listing every registered implementation of ``kind`` by name."""
        cached = self.graph.get(kind)
        if cached is not None:
            return cached
        implementations = Docs()
        self.graph.add(kind, implementations)
        cd = self.find_class(kind)
        implementations.type_description = cd.description if cd is not None else None

        for factory in self.registry.implementations(kind):
            builder = self.factory_builder(factory)
            docs = self.describe(builder)
            if docs is None:
                logger.warning(f"Skipping {factory.name()}: {type_name(builder)} is not documented")
                continue
            docs.owner_description = docs.type_description
            if factory.accepts_param():
                docs.inline_param = self.find_inline_param_docs(type(factory))
            implementations.add_param(factory.name(), docs)
            self.graph.add_dependency(kind, builder, factory.name())
        logger.debug(f"{type_name(kind)}: {len(implementations.params)} implementations")
        return implementations


@dataclass
class Reference:
    """Roots of the rendered reference."""

    steps: CaseInsensitiveDict
    actions: Docs
    processors: Docs
    graph: DocGraph = field(repr=False, default_factory=DocGraph)


class ReferenceGenerator:
    """Collects steps, actions and processors of one API.

    Args:
        builder: Graph builder of this run.
        catalog: Class whose methods create the steps of a sequence.
    """

    def __init__(self, builder: DocGraphBuilder, catalog: Optional[type] = None):
        self.builder = builder
        self.catalog = catalog
        self.steps: CaseInsensitiveDict = CaseInsensitiveDict()

    @property
    def vocabulary(self) -> Vocabulary:
        return self.builder.vocabulary

    def collect(self) -> Reference:
        if self.catalog is not None:
            self._collect_catalog(self.catalog)
        for factory in self.builder.registry.implementations(self.vocabulary.step_factory):
            builder = self.builder.factory_builder(factory)
            if self.builder.find_class(type(factory)) is None:
                continue
            inline_docs = self.builder.find_inline_param_docs(type(factory))
            self.add_step(factory.name(), builder, None, factory.accepts_param(), inline_docs)

        reference = Reference(
            steps=self.steps,
            actions=self.builder.implementations(self.vocabulary.action_factory),
            processors=self.builder.implementations(self.vocabulary.processor_factory),
            graph=self.builder.graph,
        )
        self.builder.graph.log_summary()
        logger.info(
            f"Collected {len(reference.steps)} steps, {len(reference.actions.params)} actions, "
            f"{len(reference.processors.params)} processors"
        )
        return reference

    def _collect_catalog(self, catalog: type) -> None:
        declarations = self.builder.find_all_methods(catalog)
        for method in public_methods(catalog):
            declaration = find_matching(declarations, method)
            if declaration is None:
                continue
            returned = origin_class(method.return_type)
            if returned is None:
                continue
            if issubclass(returned, self.vocabulary.step_builder):
                self.add_step(method.name, returned, declaration.description, False, None)
            elif issubclass(returned, self.vocabulary.base_sequence_builder):
                self.add_simple_step(method, declaration)

    def add_simple_step(self, method: MethodDescriptor, declaration: SyntaxMethod) -> None:
        """Step created directly by the catalog, optionally with one inline argument."""
        description = declaration.description
        if method.parameter_count == 0:
            self.steps.setdefault(method.name, Docs.of(description))
        elif method.parameter_count == 1:
            step = self.steps.get(method.name)
            if step is None:
                step = Docs.of(description)
                self.steps[method.name] = step
            step.inline_param = declaration.param_docs.get(declaration.param_names[0])

    def add_step(
        self,
        name: str,
        builder: type,
        description: Optional[str],
        inline: bool,
        inline_docs: Optional[str],
    ) -> None:
        """Add or complete the step ``name`` described by ``builder``."""
        step = self.steps.get(name)
        if step is None:
            step = self.builder.describe(builder)
            if step is None:
                logger.warning(f"Step {name}: {type_name(builder)} is not documented")
                return
            step.owner_description = description if description is not None else first_line(step.type_description)
            self.steps[name] = step
        elif not step.params:
            # created from the inline-argument variant in the catalog
            docs = self.builder.describe(builder)
            if docs is not None:
                step.type_description = description if description is not None else docs.type_description
                step.add_params(docs.params)
            if step.owner_description is None:
                step.owner_description = first_line(step.type_description)
        elif step.owner_description is None and description is not None:
            step.owner_description = description
        if step.inline_param is None and inline:
            step.inline_param = inline_docs
