"""Similarity adapter: Simpson (meet/min) coefficient."""

from __future__ import annotations

from cohesive.ports.similarity import SimilarityFunction


class SimpsonCoefficient(SimilarityFunction):
    """``|A & B| / min(|A|, |B|)``"""

    name = "simpson"

    def from_sizes(self, overlap: int, size_a: int, size_b: int) -> float:
        return overlap / min(size_a, size_b)
