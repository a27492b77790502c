"""Seed adapter: one single-node seed per node."""

from __future__ import annotations

from collections.abc import Iterator, Set

from cohesive.domain.graph import Graph
from cohesive.domain.models import NodeSet
from cohesive.ports.seeding import SeedGenerator


class EveryNodeSeedGenerator(SeedGenerator):
    """Seeds every node in index order."""

    name = "nodes"

    def seeds(self, graph: Graph, claimed: Set[int]) -> Iterator[NodeSet]:
        for node in graph.nodes():
            yield NodeSet(graph, (node,))
