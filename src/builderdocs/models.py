"""
builderdocs Data Models
=======================

Pydantic v2 records for the two independent descriptions of a builder API
(structural and syntactic), and the ``Docs`` node of the documentation graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field
from requests.structures import CaseInsensitiveDict


class MethodDescriptor(BaseModel):
    """A public method as seen by runtime introspection."""
    model_config = ConfigDict(frozen=True)

    name: str
    param_names: tuple[str, ...] = ()
    param_types: tuple[Any, ...] = ()     # resolved types, None where unannotated
    return_type: Any = None               # None when missing or unresolvable

    @property
    def parameter_count(self) -> int:
        return len(self.param_types)


class DocComment(BaseModel):
    """Docstring split into its free-text description and per-parameter texts."""
    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    params: dict[str, str] = Field(default_factory=dict)


class SyntaxMethod(BaseModel):
    """A method declaration as written in the source file."""
    model_config = ConfigDict(frozen=True)

    name: str
    param_names: tuple[str, ...] = ()
    param_types: tuple[Optional[str], ...] = ()   # annotation text as written
    doc: Optional[DocComment] = None
    lineno: int = 0

    @property
    def parameter_count(self) -> int:
        return len(self.param_types)

    @property
    def description(self) -> Optional[str]:
        return self.doc.description if self.doc else None

    @property
    def param_docs(self) -> dict[str, str]:
        return self.doc.params if self.doc else {}


class EnumConstantSyntax(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: Optional[str] = None


class ClassSyntax(BaseModel):
    """A class (or enum) declaration with its directly declared methods."""
    model_config = ConfigDict(frozen=True)

    name: str
    doc: Optional[DocComment] = None
    methods: tuple[SyntaxMethod, ...] = ()
    constants: tuple[EnumConstantSyntax, ...] = ()
    nested: tuple["ClassSyntax", ...] = ()
    is_enum: bool = False

    @property
    def description(self) -> Optional[str]:
        return self.doc.description if self.doc else None


@dataclass(eq=False)
class Docs:
    """Documentation node for one builder type or one property value.

    Nodes compare and hash by identity: the graph may be cyclic and the same
    node is shared by every property that refers to the same builder type.
    """

    owner_description: Optional[str] = None
    type_description: Optional[str] = None
    inline_param: Optional[str] = None
    params: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    link: Optional[str] = None

    @classmethod
    def of(cls, description: Optional[str]) -> "Docs":
        """Node describing itself with ``description`` wherever it appears."""
        return cls(owner_description=description, type_description=description)

    @property
    def is_complex(self) -> bool:
        return len(self.params) > 0

    @property
    def is_leaf(self) -> bool:
        return not self.params and self.type_description is None and self.inline_param is None

    def add_param(self, name: str, docs: "Docs") -> None:
        options = self.params.get(name)
        if options is None:
            self.params[name] = [docs]
        else:
            options.append(docs)

    def add_params(self, params: CaseInsensitiveDict) -> None:
        for name, options in list(params.items()):
            for docs in list(options):
                self.add_param(name, docs)

    def sorted_params(self) -> list[tuple[str, list["Docs"]]]:
        """Properties in case-insensitive alphabetical order (ties keep insertion order)."""
        return sorted(self.params.items(), key=lambda item: item[0].lower())

    def iter_options(self) -> Iterator[tuple[str, "Docs"]]:
        for name, options in self.sorted_params():
            for docs in options:
                yield name, docs

    def __repr__(self) -> str:
        return f"Docs(params={list(self.params.keys())!r}, link={self.link!r})"


@dataclass(eq=False)
class Section:
    """A flattened, uniquely named sub-node of a rendered page."""

    name: str
    anchor: str
    docs: Docs
