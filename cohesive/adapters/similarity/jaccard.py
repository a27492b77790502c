"""Similarity adapter: Jaccard index."""

from __future__ import annotations

from cohesive.ports.similarity import SimilarityFunction


class JaccardSimilarity(SimilarityFunction):
    """``|A & B| / |A | B|``"""

    name = "jaccard"

    def from_sizes(self, overlap: int, size_a: int, size_b: int) -> float:
        return overlap / (size_a + size_b - overlap)
