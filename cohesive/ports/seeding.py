"""Port: source of initial node sets for greedy growth."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Set

from cohesive.domain.graph import Graph
from cohesive.domain.models import NodeSet


class SeedGenerator(ABC):
    """Produce an ordered, finite sequence of seeds for a graph.

    ``claimed`` is the live set of nodes already covered by grown
    clusters.  Generators that consult it must set ``sequential`` so the
    orchestrator grows their seeds one at a time.
    """

    name: str = ""
    sequential: bool = False

    @abstractmethod
    def seeds(self, graph: Graph, claimed: Set[int]) -> Iterator[NodeSet]:
        """Yield seeds lazily, in a deterministic order."""

    def __str__(self) -> str:
        return self.name or type(self).__name__
