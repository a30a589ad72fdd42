"""
Structural Introspection
========================

Runtime view of a builder type: its public instance methods with resolved
parameter and return types, and its supertypes.
"""

from __future__ import annotations

import enum
import inspect
import logging
import typing
from typing import Any, List, Optional

from builderdocs.models import MethodDescriptor

logger = logging.getLogger("builderdocs.introspection.structure")

PRIMITIVES = frozenset({"int", "float", "str", "bool", "bytes", "complex"})

_SELF = getattr(typing, "Self", None)


def type_name(tp: Any) -> str:
    """Fully qualified display name of a type (builtins by bare name)."""
    if tp is None:
        return "None"
    if isinstance(tp, type) and typing.get_origin(tp) is None:
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def is_primitive(tp: Any) -> bool:
    return isinstance(tp, type) and tp.__module__ == "builtins" and tp.__name__ in PRIMITIVES


def is_enum(tp: Any) -> bool:
    return isinstance(tp, type) and typing.get_origin(tp) is None and issubclass(tp, enum.Enum)


def origin_class(tp: Any) -> Optional[type]:
    """The class behind ``tp``: itself, or the origin of a parameterized generic."""
    if tp is None or tp is typing.Any:
        return None
    if isinstance(tp, type) and typing.get_origin(tp) is None:
        return tp
    origin = typing.get_origin(tp)
    if isinstance(origin, type):
        return origin
    return None


def is_subclass(cls: type, base: type) -> bool:
    """``issubclass`` that answers False where the check is undefined.

    Plain ``typing.Protocol`` classes (not ``runtime_checkable``) and protocols
    with data members refuse subclass checks with ``TypeError``.
    """
    try:
        return issubclass(cls, base)
    except TypeError:
        logger.debug(f"Cannot check {type_name(cls)} against {type_name(base)}")
        return False


def is_subtype(tp: Any, base: type) -> bool:
    cls = origin_class(tp)
    return cls is not None and is_subclass(cls, base)


def supertypes(cls: type) -> List[type]:
    """Supertypes of ``cls`` in method resolution order, ``object`` excluded."""
    return [klass for klass in cls.__mro__[1:] if klass is not object]


def describe_function(func: Any, owner: type) -> MethodDescriptor:
    """Build the descriptor of one function declared on (or inherited by) ``owner``."""
    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError) as e:
        logger.debug(f"Cannot resolve type hints of {owner.__qualname__}.{func.__name__}: {e}")
        hints = {}

    params = list(inspect.signature(func).parameters.values())[1:]  # drop self
    param_types = []
    for param in params:
        tp = hints.get(param.name)
        param_types.append(owner if tp is _SELF and _SELF is not None else tp)

    return_type = hints.get("return")
    if _SELF is not None and return_type is _SELF:
        return_type = owner

    return MethodDescriptor(
        name=func.__name__,
        param_names=tuple(p.name for p in params),
        param_types=tuple(param_types),
        return_type=return_type,
    )


def public_methods(cls: type) -> List[MethodDescriptor]:
    """Public, non-static instance methods of ``cls``, most derived definition first.

    A function with ``@typing.overload`` variants yields one descriptor per
    variant instead of one for the implementation.
    """
    seen = set()
    methods: List[MethodDescriptor] = []
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in seen:
                continue
            seen.add(name)
            if isinstance(attr, (staticmethod, classmethod)):
                continue
            if not inspect.isfunction(attr):
                continue
            overloads = typing.get_overloads(attr)
            for func in overloads or [attr]:
                methods.append(describe_function(func, cls))
    return methods
