"""Similarity adapter: matching ratio."""

from __future__ import annotations

from cohesive.ports.similarity import SimilarityFunction


class MatchingScore(SimilarityFunction):
    """``|A & B| / max(|A|, |B|)``"""

    name = "match"

    def from_sizes(self, overlap: int, size_a: int, size_b: int) -> float:
        return overlap / max(size_a, size_b)
