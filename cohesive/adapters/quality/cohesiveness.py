"""Quality adapter: cohesiveness with a per-node penalty.

    score = w_in / (w_in + w_bound + penalty * |set|)

Without the penalty a single heavy edge with nothing else around it
would score a perfect 1.0; the penalty acts as extra boundary weight on
every member and discounts small, weakly anchored sets.
"""

from __future__ import annotations

from cohesive.domain.models import NodeSet
from cohesive.ports.quality import QualityFunction


class CohesivenessFunction(QualityFunction):
    """Internal vs. boundary weight ratio, evaluated from cached aggregates."""

    def __init__(self, node_penalty: float = 2.0):
        self._penalty = node_penalty

    @property
    def node_penalty(self) -> float:
        return self._penalty

    def score(self, node_set: NodeSet) -> float:
        return self._ratio(node_set.internal_weight, node_set.boundary_weight, node_set.size)

    def addition_gain(self, node_set: NodeSet, node: int) -> float:
        w = node_set.link_weight(node)
        strength = node_set.graph.strength(node)
        after = self._ratio(
            node_set.internal_weight + w,
            node_set.boundary_weight + strength - 2.0 * w,
            node_set.size + 1,
        )
        return after - self.score(node_set)

    def removal_gain(self, node_set: NodeSet, node: int) -> float:
        w = node_set.link_weight(node)
        strength = node_set.graph.strength(node)
        after = self._ratio(
            node_set.internal_weight - w,
            node_set.boundary_weight - strength + 2.0 * w,
            node_set.size - 1,
        )
        return after - self.score(node_set)

    def _ratio(self, internal: float, boundary: float, size: int) -> float:
        if size <= 0:
            return 0.0
        denominator = internal + boundary + self._penalty * size
        if denominator <= 0.0:
            return 0.0
        return internal / denominator

    def __repr__(self) -> str:
        return f"CohesivenessFunction(node_penalty={self._penalty})"
