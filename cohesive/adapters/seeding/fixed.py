"""Seed adapter: an externally supplied list of seeds."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Set

from cohesive.domain.graph import Graph
from cohesive.domain.models import NodeSet
from cohesive.ports.seeding import SeedGenerator


class FixedSeedGenerator(SeedGenerator):
    """Yields the given node groups as seeds, in the given order."""

    name = "fixed"

    def __init__(self, seeds: Iterable[Iterable[int]]):
        self._seeds = [tuple(seed) for seed in seeds]

    def seeds(self, graph: Graph, claimed: Set[int]) -> Iterator[NodeSet]:
        for seed in self._seeds:
            bad = [n for n in seed if not 0 <= n < graph.node_count]
            if bad:
                raise IndexError(
                    f"Seed {seed!r} references nodes outside 0..{graph.node_count - 1}: {bad}"
                )
            yield NodeSet(graph, seed)

    def __len__(self) -> int:
        return len(self._seeds)
