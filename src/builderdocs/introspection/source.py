"""
Source Parser
=============

Syntactic view of a builder API: classes, enums and method declarations
parsed with :mod:`ast`, each carrying its docstring split into a description
and per-parameter texts.

Source files are located the way modules are laid out on disk
(``pkg/mod.py`` or ``pkg/mod/__init__.py``) under the configured source
directories. Parsing has no type resolution: annotations are kept as the
text that was written.
"""

from __future__ import annotations

import ast
import inspect
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from griffe import (
    Docstring,
    DocstringSectionOtherParameters,
    DocstringSectionParameters,
    DocstringSectionText,
)

from builderdocs.models import ClassSyntax, DocComment, EnumConstantSyntax, SyntaxMethod

logger = logging.getLogger("builderdocs.introspection.source")

_ENUM_BASES = {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag"}


def trim_empty_lines(text: str) -> Optional[str]:
    """Join docstring lines, turning blank separator lines into ``<br>``.

    Leading and trailing blank lines are dropped; returns None for blank text.
    """
    lines = text.split("\n")
    first, last = 0, len(lines) - 1
    while first < len(lines) and not lines[first].strip():
        first += 1
    while last >= first and not lines[last].strip():
        last -= 1
    parts = []
    for line in lines[first:last + 1]:
        if not line.strip():
            parts.append("<br>")
        parts.append(line + " ")
    if not parts:
        return None
    return "".join(parts)


def format_description(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    description = trim_empty_lines(text)
    if description is not None and "<ul>" in description:
        description = "{::nomarkdown}" + description + "{:/}"
    return description


def parse_docstring(raw: Optional[str]) -> Optional[DocComment]:
    """Split a docstring into description and parameter texts.

    Parsed with griffe: Sphinx style when the text has ``:param`` fields, Google
    style otherwise. Text sections form the description; parameter sections
    give one text per parameter name. Other sections are ignored.
    """
    if raw is None:
        return None
    text = inspect.cleandoc(raw)
    docstring = Docstring(text, parser="sphinx" if ":param" in text else "google")
    description: List[str] = []
    params: Dict[str, str] = {}
    for section in docstring.parsed:
        if isinstance(section, DocstringSectionText):
            description.append(section.value)
        elif isinstance(section, (DocstringSectionParameters, DocstringSectionOtherParameters)):
            for item in section.value:
                params[item.name] = " ".join(item.description.split())
    return DocComment(description=format_description("\n\n".join(description)), params=params)


def annotation_text(node: Optional[ast.expr]) -> Optional[str]:
    """Annotation as written; string annotations are unquoted."""
    if node is None:
        return None
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value.strip()
    return ast.unparse(node)


def _parse_method(node: ast.FunctionDef | ast.AsyncFunctionDef) -> SyntaxMethod:
    args = node.args
    positional = [*args.posonlyargs, *args.args]
    all_args = [*positional]
    if args.vararg is not None:
        all_args.append(args.vararg)
    all_args.extend(args.kwonlyargs)
    if args.kwarg is not None:
        all_args.append(args.kwarg)
    if positional and positional[0].arg in ("self", "cls"):
        all_args = all_args[1:]
    return SyntaxMethod(
        name=node.name,
        param_names=tuple(a.arg for a in all_args),
        param_types=tuple(annotation_text(a.annotation) for a in all_args),
        doc=parse_docstring(ast.get_docstring(node, clean=False)),
        lineno=node.lineno,
    )


def _enum_constants(node: ast.ClassDef) -> List[EnumConstantSyntax]:
    """Enum members in declaration order, each with its attribute docstring."""
    constants = []
    body = node.body
    for i, stmt in enumerate(body):
        if isinstance(stmt, ast.Assign) and len(stmt.targets) == 1:
            target = stmt.targets[0]
        elif isinstance(stmt, ast.AnnAssign) and stmt.value is not None:
            target = stmt.target
        else:
            continue
        if not isinstance(target, ast.Name) or target.id.startswith("_"):
            continue
        doc = None
        if i + 1 < len(body):
            following = body[i + 1]
            if (isinstance(following, ast.Expr) and isinstance(following.value, ast.Constant)
                    and isinstance(following.value.value, str)):
                doc = format_description(inspect.cleandoc(following.value.value))
        constants.append(EnumConstantSyntax(name=target.id, description=doc))
    return constants


def _base_name(node: ast.expr) -> str:
    text = ast.unparse(node)
    return text.rsplit(".", 1)[-1].split("[", 1)[0]


def parse_class(node: ast.ClassDef) -> ClassSyntax:
    is_enum = any(_base_name(base) in _ENUM_BASES for base in node.bases)
    methods = [
        _parse_method(stmt) for stmt in node.body
        if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef))
    ]
    nested = [parse_class(stmt) for stmt in node.body if isinstance(stmt, ast.ClassDef)]
    return ClassSyntax(
        name=node.name,
        doc=parse_docstring(ast.get_docstring(node, clean=False)),
        methods=tuple(methods),
        constants=tuple(_enum_constants(node)) if is_enum else (),
        nested=tuple(nested),
        is_enum=is_enum,
    )


def _find_first(classes: Sequence[ClassSyntax], name: str) -> Optional[ClassSyntax]:
    """Pre-order search for a class declaration named ``name``."""
    for cls in classes:
        if cls.name == name:
            return cls
        found = _find_first(cls.nested, name)
        if found is not None:
            return found
    return None


def _is_stdlib(module: str) -> bool:
    return module.split(".")[0] in sys.stdlib_module_names or module == "builtins"


class SourceIndex:
    """Parsed source files of one generation run, looked up by module and class.

    Args:
        source_dirs: Directories searched in order for ``pkg/mod.py``.
        fallback_to_module_file: When no source directory holds the module, read
            the file the module was imported from.
    """

    def __init__(self, source_dirs: Sequence[str | Path] = (), fallback_to_module_file: bool = True):
        self.source_dirs = [Path(d).expanduser() for d in source_dirs]
        self.fallback_to_module_file = fallback_to_module_file
        self._units: Dict[str, Optional[List[ClassSyntax]]] = {}
        self._reported: set = set()

    def find_file(self, module: str) -> Optional[Path]:
        relative = Path(*module.split("."))
        for directory in self.source_dirs:
            for candidate in (directory / relative.with_suffix(".py"), directory / relative / "__init__.py"):
                if candidate.is_file():
                    return candidate
        if self.fallback_to_module_file and not _is_stdlib(module):
            mod = sys.modules.get(module)
            filename = getattr(mod, "__file__", None)
            if filename and filename.endswith(".py"):
                return Path(filename)
        return None

    def unit(self, module: str) -> Optional[List[ClassSyntax]]:
        """Top-level class declarations of ``module``, or None if unavailable."""
        if module in self._units:
            return self._units[module]
        classes = None
        path = self.find_file(module)
        if path is None:
            if _is_stdlib(module):
                logger.debug(f"Skipping standard library module {module}")
            else:
                logger.warning(f"Cannot find source code for module {module}")
        else:
            classes = self._parse(path)
        self._units[module] = classes
        return classes

    def _parse(self, path: Path) -> Optional[List[ClassSyntax]]:
        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except SyntaxError as e:
            logger.error(f"Cannot parse file {path}: line {e.lineno}: {e.msg}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read file {path}: {e}")
            return None
        return [parse_class(node) for node in tree.body if isinstance(node, ast.ClassDef)]

    def find_class(self, cls: type) -> Optional[ClassSyntax]:
        """Declaration of ``cls``, walking nested classes along its qualified name."""
        classes = self.unit(cls.__module__)
        if classes is None:
            return None
        path = cls.__qualname__.split(".")
        if "<locals>" in path:
            self._report(cls, "declared inside a function")
            return None
        node: Optional[ClassSyntax] = None
        scope: Sequence[ClassSyntax] = classes
        for name in path:
            node = _find_first(scope, name)
            if node is None:
                self._report(cls, "no declaration found")
                return None
            scope = node.nested
        return node

    def _report(self, cls: type, reason: str) -> None:
        if cls not in self._reported:
            self._reported.add(cls)
            logger.warning(f"Cannot describe {cls.__module__}.{cls.__qualname__}: {reason}")
