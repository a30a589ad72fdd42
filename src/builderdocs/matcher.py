"""
Signature Matcher
=================

Correlates a method found by runtime introspection with its declaration in
the parsed source, so the declaration's docstring can be attached to it.

The parser does no symbol resolution, so a written annotation matches a
resolved type when the type's qualified name ends with the annotation text.
Two distinct types sharing a simple name are therefore indistinguishable;
the first candidate that matches wins.

Type arguments are erased before comparing: ``list[Host]`` matches any
``list``. An optional annotation (``Optional[X]`` or ``X | None``) is compared
through its non-None member.
"""

import logging
import typing
from types import UnionType
from typing import Any, Iterable, List, Optional

from builderdocs.introspection.structure import PRIMITIVES, is_primitive, origin_class, type_name
from builderdocs.models import MethodDescriptor, SyntaxMethod

logger = logging.getLogger("builderdocs.matcher")

_OPTIONAL_PREFIXES = ("Optional[", "typing.Optional[")


def _split_top_level(text: str, separator: str) -> List[str]:
    """Split ``text`` on ``separator`` outside of brackets."""
    parts, depth, start = [], 0, 0
    for i, char in enumerate(text):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[start:i].strip())
            start = i + 1
    parts.append(text[start:].strip())
    return parts


def unwrap_optional_text(written: str) -> str:
    """``X`` for ``Optional[X]``, ``X | None`` and ``None | X``; other text unchanged."""
    for prefix in _OPTIONAL_PREFIXES:
        if written.startswith(prefix) and written.endswith("]"):
            return written[len(prefix):-1].strip()
    members = [m for m in _split_top_level(written, "|") if m != "None"]
    if len(members) == 1:
        return members[0]
    return written


def unwrap_optional(tp: Any) -> Any:
    """The non-None member of ``Optional[X]``; other types unchanged."""
    if typing.get_origin(tp) in (typing.Union, UnionType):
        members = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return tp


def matches_type(written: Optional[str], tp: Any) -> bool:
    """Whether an annotation as written denotes the resolved type ``tp``."""
    if written is None or tp is None:
        return written is None and tp is None
    written = unwrap_optional_text(written)
    tp = unwrap_optional(tp)
    if written in PRIMITIVES:
        return is_primitive(tp) and tp.__name__ == written
    if "[" in written:
        base = origin_class(tp)
        return base is not None and type_name(base).endswith(written.split("[", 1)[0])
    return type_name(tp).endswith(written)


def matches(declaration: SyntaxMethod, name: str, *types: Any) -> bool:
    """Whether ``declaration`` is ``name(*types)``."""
    if declaration.name != name or declaration.parameter_count != len(types):
        return False
    return all(matches_type(w, t) for w, t in zip(declaration.param_types, types))


def find_matching(candidates: Iterable[SyntaxMethod], target: MethodDescriptor) -> Optional[SyntaxMethod]:
    """First declaration whose name, arity and parameter types match ``target``."""
    for candidate in candidates:
        if matches(candidate, target.name, *target.param_types):
            logger.debug(f"Matched {target.name}() to the declaration at line {candidate.lineno}")
            return candidate
    return None
