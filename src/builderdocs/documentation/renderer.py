"""
Markdown Reference Renderer
===========================

Writes the collected reference as markdown pages.

Generates:
1. index.md - steps, actions and processors with one-line summaries
2. step_<name>.md - one page per step
3. action_<name>.md / processor_<name>.md - one page per registered implementation

Every page holds the property table of its root node followed by one section
per flattened sub-node, in case-insensitive alphabetical order.

Usage:
    renderer = MarkdownRenderer(Path("docs/reference"))
    renderer.render(reference)
"""

from __future__ import annotations

import html
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from builderdocs.flatten import Flattening, flatten
from builderdocs.generator import Reference
from builderdocs.models import Docs

logger = logging.getLogger("builderdocs.documentation.renderer")

NO_DESCRIPTION = '<font color="#606060">&lt;no description&gt;</font>'
TABLE_HEADER = "| Property | Description |\n| ------- | -------- |"


def escape(text: str) -> str:
    return html.escape(text, quote=False)


def summary(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.split("\n", 1)[0]


class MarkdownRenderer:
    """Render a ``Reference`` into a directory of markdown pages.

    Args:
        output_dir: Directory receiving the pages (created when missing).
        title: Heading of the index page.
        link_suffix: Suffix of links between pages, as served after conversion.
    """

    def __init__(self, output_dir: Path, title: str = "Reference", link_suffix: str = ".html"):
        self.output_dir = Path(output_dir)
        self.title = title
        self.link_suffix = link_suffix

    # ── pages ───────────────────────────────────────────────────────────

    def render(self, reference: Reference) -> List[Path]:
        """Write all pages; returns the paths that were written."""
        if self.output_dir.exists() and not self.output_dir.is_dir():
            logger.error(f"Output {self.output_dir} must be a directory")
            return []
        written: List[Path] = []
        self._write(self.output_dir / "index.md", self.render_index(reference), written)
        for kind, entries in (
            ("step", sorted(reference.steps.items(), key=lambda e: e[0].lower())),
            ("action", self._roots(reference.actions)),
            ("processor", self._roots(reference.processors)),
        ):
            for name, docs in entries:
                self._write(self.output_dir / f"{kind}_{name}.md", self.render_page(name, docs), written)
        logger.info(f"Generated {len(written)} reference pages in {self.output_dir}")
        return written

    @staticmethod
    def _roots(registry: Docs) -> List[tuple[str, Docs]]:
        return [(name, options[0]) for name, options in registry.sorted_params()]

    def _write(self, path: Path, content: str, written: List[Path]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write file {path}: {e}")
            return
        written.append(path)

    def render_index(self, reference: Reference) -> str:
        lines = [f"# {self.title}", ""]
        lines += ["", "## Steps"]
        for name, docs in sorted(reference.steps.items(), key=lambda e: e[0].lower()):
            lines.append(self.render_entry("step", name, docs))
        lines += ["", "## Actions"]
        for name, docs in self._roots(reference.actions):
            lines.append(self.render_entry("action", name, docs))
        lines += ["", "## Processors"]
        for name, docs in self._roots(reference.processors):
            lines.append(self.render_entry("processor", name, docs))
        return "\n".join(lines) + "\n"

    def render_entry(self, kind: str, name: str, docs: Docs) -> str:
        link = f"* [{name}](./{kind}_{name}{self.link_suffix})"
        description = summary(docs.owner_description)
        return link if description is None else f"{link}: {description}"

    def render_page(self, name: str, docs: Docs) -> str:
        return "\n".join([f"# {name}", "", *self.render_docs(docs)]) + "\n"

    # ── tables ──────────────────────────────────────────────────────────

    def render_docs(self, docs: Docs) -> List[str]:
        lines: List[str] = []
        if docs.type_description is not None:
            lines.append(docs.type_description)
        if docs.inline_param is not None:
            lines += ["", "| Inline definition |\n| -------- |", f"| {docs.inline_param} |", ""]
        if not docs.params:
            return lines

        flattening = flatten(docs)
        lines += ["", TABLE_HEADER]
        for name, options in docs.sorted_params():
            lines += self.render_property(name, options, flattening)
        lines.append("")

        for section in flattening.sections:
            lines.append(f'### <a id="{escape(section.anchor)}"></a>{escape(section.name)}')
            lines.append("")
            if section.docs.type_description is not None:
                lines += [section.docs.type_description, ""]
            lines.append(TABLE_HEADER)
            for name, options in section.docs.sorted_params():
                lines += self.render_property(name, options, flattening)
            lines.append("")
        return lines

    def render_property(self, name: str, options: Sequence[Docs], flattening: Flattening) -> List[str]:
        """One row per documented alternative of property ``name``."""
        rows = []
        label = escape(name)
        for docs in options:
            if docs.owner_description is None and not docs.params:
                continue
            if docs.link is not None:
                cell = f"[{label}]({docs.link})"
            elif not docs.params:
                cell = label
            else:
                anchor = flattening.anchor_of(docs)
                cell = f"[{label}](#{escape(anchor)})" if anchor is not None else f"[{label}](#)"
            if rows:
                cell += " (alternative)"
            description = docs.owner_description if docs.owner_description is not None else NO_DESCRIPTION
            rows.append(f"| {cell} | {description} |")
        if not rows:
            rows.append(f"| {label} | {NO_DESCRIPTION} |")
        return rows
