"""
builderdocs Graph Arena
=======================

Directed graph of documented builder types. Each node is a builder type (or
a factory kind) and carries the single ``Docs`` record built for it during a
run; an edge ``owner -> target`` means a property of ``owner`` is described
by ``target``. Cycles are legal: they are broken by memoization, not by
removing edges.
"""

import logging
from typing import List, Optional

import networkx as nx

from builderdocs.introspection.structure import type_name
from builderdocs.models import Docs

logger = logging.getLogger("builderdocs.graph")


class DocGraph:
    """Memoization table of one generation run, addressed by builder type."""

    def __init__(self):
        self._graph = nx.DiGraph()

    def __contains__(self, builder: type) -> bool:
        return self._graph.has_node(builder)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def get(self, builder: type) -> Optional[Docs]:
        if not self._graph.has_node(builder):
            return None
        return self._graph.nodes[builder]["docs"]

    def add(self, builder: type, docs: Docs) -> None:
        """Record the node of ``builder``. A type is recorded exactly once per run."""
        if self._graph.has_node(builder):
            raise ValueError(f"{type_name(builder)} is already described")
        self._graph.add_node(builder, docs=docs)

    def add_dependency(self, owner: type, target: type, prop: str) -> None:
        """Record that property ``prop`` of ``owner`` is described by ``target``."""
        if not (self._graph.has_node(owner) and self._graph.has_node(target)):
            return
        if self._graph.has_edge(owner, target):
            self._graph[owner][target]["properties"].append(prop)
        else:
            self._graph.add_edge(owner, target, properties=[prop])

    def cycles(self) -> List[List[type]]:
        """Reference cycles between builder types, self-references included."""
        return [list(cycle) for cycle in nx.simple_cycles(self._graph)]

    def log_summary(self) -> None:
        cycles = self.cycles()
        logger.info(
            f"Described {len(self)} types, {self._graph.number_of_edges()} references, "
            f"{len(cycles)} cycles"
        )
        for cycle in cycles:
            names = " -> ".join(type_name(t) for t in cycle + cycle[:1])
            logger.debug(f"Reference cycle: {names}")
