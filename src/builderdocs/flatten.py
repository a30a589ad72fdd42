"""
Graph Flattener
===============

Turns the (possibly cyclic, shared) graph below one root node into uniquely
named sections. Expansion is breadth first: a node reachable through several
paths is named after the first path discovered at the shallowest level, and
no node is expanded twice, so cycles terminate.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from builderdocs.models import Docs, Section

logger = logging.getLogger("builderdocs.flatten")


@dataclass
class Flattening:
    """Sections below ``root`` and the reverse lookup node -> section."""

    root: Docs
    sections: List[Section] = field(default_factory=list)
    lookup: Dict[Docs, Section] = field(default_factory=dict)

    def anchor_of(self, docs: Docs) -> Optional[str]:
        section = self.lookup.get(docs)
        return section.anchor if section is not None else None

    def name_of(self, docs: Docs) -> Optional[str]:
        section = self.lookup.get(docs)
        return section.name if section is not None else None


def _expandable(docs: Docs) -> bool:
    return docs.link is None and docs.is_complex


class Flattener:
    """Assigns names to the complex nodes below a root; one instance per page."""

    def __init__(self):
        self._seen: set = set()

    def flatten(self, root: Docs) -> Flattening:
        self._seen = {root}
        result = Flattening(root=root)
        frontier = [(name, docs) for name, docs in root.iter_options()]
        level = 0
        while frontier:
            discovered: List[Section] = []
            for name, docs in frontier:
                if not _expandable(docs) or docs in self._seen:
                    continue
                self._seen.add(docs)
                section = Section(name=name, anchor=name, docs=docs)
                discovered.append(section)
                result.lookup[docs] = section
            result.sections.extend(discovered)
            frontier = [
                (f"{section.name}.{name}", docs)
                for section in discovered
                for name, docs in section.docs.iter_options()
            ]
            level += 1
        logger.debug(f"Flattened {len(result.sections)} sections in {level} levels")
        result.sections.sort(key=lambda s: s.name.lower())
        return result


def flatten(root: Docs) -> Flattening:
    return Flattener().flatten(root)
