"""Port: pairwise similarity between two node sets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from cohesive.domain.models import NodeSet


class SimilarityFunction(ABC):
    """Commutative similarity in [0, 1]; identical sets score 1."""

    name: str = ""

    def similarity(self, a: NodeSet | Iterable[int], b: NodeSet | Iterable[int]) -> float:
        set_a = a.members if isinstance(a, NodeSet) else frozenset(a)
        set_b = b.members if isinstance(b, NodeSet) else frozenset(b)
        if not set_a and not set_b:
            return 1.0
        if not set_a or not set_b:
            return 0.0
        return self.from_sizes(len(set_a & set_b), len(set_a), len(set_b))

    @abstractmethod
    def from_sizes(self, overlap: int, size_a: int, size_b: int) -> float:
        """Compute the similarity from the overlap and the two set sizes."""
