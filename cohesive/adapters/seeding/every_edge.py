"""Seed adapter: one two-node seed per edge."""

from __future__ import annotations

from collections.abc import Iterator, Set

from cohesive.domain.graph import Graph
from cohesive.domain.models import NodeSet
from cohesive.ports.seeding import SeedGenerator


class EveryEdgeSeedGenerator(SeedGenerator):
    """Seeds the endpoints of every edge, ordered by ``(u, v)`` with ``u < v``."""

    name = "edges"

    def seeds(self, graph: Graph, claimed: Set[int]) -> Iterator[NodeSet]:
        for u, v, _ in graph.edges():
            yield NodeSet(graph, (u, v))
