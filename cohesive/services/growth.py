"""Service: greedy growth of a seed towards a local quality optimum.

At every step the single add-or-remove move with the largest strictly
positive gain is applied; ties go to the lowest node index.  Every
accepted move raises the quality, which is bounded above, so growth
always stops.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cohesive.domain.graph import Graph
from cohesive.domain.models import NodeSet
from cohesive.ports.quality import QualityFunction

log = logging.getLogger(__name__)

# Gains at or below this are treated as zero so rounding noise cannot
# make an add and the matching remove both look like improvements.
MIN_GAIN = 1e-12


class GreedyGrowthService:
    """Hill-climb a node set on a quality function."""

    def __init__(self, graph: Graph, quality: QualityFunction, *, min_gain: float = MIN_GAIN):
        self._graph = graph
        self._quality = quality
        self._min_gain = min_gain

    @property
    def quality(self) -> QualityFunction:
        return self._quality

    def grow(self, seed: NodeSet | Iterable[int]) -> NodeSet:
        """Grow *seed* and return the resulting frozen node set.

        The seed itself is never modified.
        """
        members = seed.members if isinstance(seed, NodeSet) else frozenset(seed)
        current = NodeSet(self._graph, members, quality_function=self._quality)

        steps = 0
        while True:
            move = self._best_move(current)
            if move is None:
                break
            node, is_addition = move
            if is_addition:
                current.add(node)
            else:
                current.remove(node)
            steps += 1

        log.debug(
            "Grew seed of %d node(s) to %d node(s) in %d step(s), quality %.4f",
            len(members),
            current.size,
            steps,
            current.quality,
        )
        return current.freeze()

    def _best_move(self, current: NodeSet) -> tuple[int, bool] | None:
        """Return ``(node, is_addition)`` for the best improving move, if any."""
        best_gain = self._min_gain
        best: tuple[int, bool] | None = None

        for node in current.frontier():
            gain = self._quality.addition_gain(current, node)
            if gain > best_gain:
                best_gain = gain
                best = (node, True)

        if current.size > 1:
            for node in sorted(current.members):
                gain = self._quality.removal_gain(current, node)
                if gain > best_gain or (
                    gain == best_gain and best is not None and node < best[0]
                ):
                    best_gain = gain
                    best = (node, False)

        return best
