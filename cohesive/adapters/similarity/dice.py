"""Similarity adapter: Dice coefficient."""

from __future__ import annotations

from cohesive.ports.similarity import SimilarityFunction


class DiceSimilarity(SimilarityFunction):
    """``2 |A & B| / (|A| + |B|)``"""

    name = "dice"

    def from_sizes(self, overlap: int, size_a: int, size_b: int) -> float:
        return 2.0 * overlap / (size_a + size_b)
