"""
Builder Classifier
==================

Decides how a builder method is documented from its return type.

Categories are evaluated in a fixed priority order. ``SELF_RETURN`` is
exclusive: a method returning its own builder is a plain property and is
never recursed into. The remaining categories are cumulative; each one that
applies contributes its own synthetic or merged properties.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List

from builderdocs.introspection.structure import is_subclass, is_subtype, origin_class
from builderdocs.models import MethodDescriptor
from builderdocs.vocabulary import Vocabulary

END_RE = re.compile(r"^end([A-Z_].*)?$")

BUILDER_SUFFIX = "Builder"


class BuilderCategory(str, Enum):
    SELF_RETURN = "self_return"
    PAIR = "pair"
    PARTIAL = "partial"
    SEQUENCE = "sequence"
    LIST_OF_STRINGS = "list_of_strings"
    LIST_OF_MAPPINGS = "list_of_mappings"
    PLUGIN_REGISTRY = "plugin_registry"
    NESTED_BUILDER = "nested_builder"


# Synthetic property names, escaped by the renderer
ANY_KEY = "<any>"
LIST_OF_STEPS = "<list of steps>"
LIST_OF_STRINGS = "<list of strings>"
LIST_OF_MAPPINGS = "<list of mappings>"


def is_self_return(method: MethodDescriptor, owner: type) -> bool:
    returned = origin_class(method.return_type)
    return returned is not None and is_subclass(owner, returned)


def is_excluded(method: MethodDescriptor, owner: type, vocabulary: Vocabulary) -> bool:
    """Plumbing methods that never become a documented property."""
    name, count = method.name, method.parameter_count
    if name.startswith("_"):
        return True
    if END_RE.match(name):
        return True  # climbs back to the parent builder
    if name == "copy" and count == 1 and method.param_types[0] is vocabulary.locator:
        return True
    if name == "accept" and count == 2 and issubclass(owner, vocabulary.pair_builders):
        return True
    if name == "with_key" and count == 1 and issubclass(owner, vocabulary.partial_builder):
        return True
    if name == "next_item" and count == 1 and issubclass(owner, vocabulary.list_builder):
        return True
    if name == "add_item" and count == 0 and issubclass(owner, vocabulary.mapping_list_builder):
        return True
    return False


def classify(method: MethodDescriptor, owner: type, vocabulary: Vocabulary) -> List[BuilderCategory]:
    """Categories of ``method`` declared on ``owner``, in priority order."""
    returned = method.return_type
    if origin_class(returned) is None:
        return []
    if is_self_return(method, owner):
        return [BuilderCategory.SELF_RETURN]

    categories = []
    if any(is_subtype(returned, base) for base in vocabulary.pair_builders):
        categories.append(BuilderCategory.PAIR)
    if is_subtype(returned, vocabulary.partial_builder):
        categories.append(BuilderCategory.PARTIAL)
    if is_subtype(returned, vocabulary.base_sequence_builder):
        categories.append(BuilderCategory.SEQUENCE)
    if is_subtype(returned, vocabulary.list_builder):
        categories.append(BuilderCategory.LIST_OF_STRINGS)
    if is_subtype(returned, vocabulary.mapping_list_builder):
        categories.append(BuilderCategory.LIST_OF_MAPPINGS)
    if is_subtype(returned, vocabulary.service_loaded_builder_provider):
        categories.append(BuilderCategory.PLUGIN_REGISTRY)
    if origin_class(returned).__name__.endswith(BUILDER_SUFFIX):
        categories.append(BuilderCategory.NESTED_BUILDER)
    return categories
