"""Service: final refinement and filtering of merged node sets.

Applied per set, in order: haircut, fluffing, k-core filter, then the
size and density thresholds.  Refinement steps never mutate their input;
they work on a thawed copy and hand back a frozen set.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cohesive.domain.models import AlgorithmParameters, HaircutPolicy, NodeSet
from cohesive.ports.quality import QualityFunction

log = logging.getLogger(__name__)

FLUFF_RATIO = 2.0 / 3.0


def haircut(
    node_set: NodeSet,
    threshold: float,
    policy: HaircutPolicy = HaircutPolicy.SINGLE_PASS,
    quality: QualityFunction | None = None,
) -> NodeSet:
    """Remove members whose internal weight is below ``threshold * average``.

    The average is the mean per-member internal weight.  ``single_pass``
    computes it once and removes every weak member in one step;
    ``fixed_point`` repeats until no member falls below the bar.
    """
    result = node_set.thaw_copy(quality)
    while result.size > 0:
        average = 2.0 * result.internal_weight / result.size
        cutoff = threshold * average
        weak = [n for n in result.members if result.link_weight(n) < cutoff]
        for node in weak:
            result.remove(node)
        if not weak or policy is HaircutPolicy.SINGLE_PASS:
            break
    return result.freeze()


def fluff(node_set: NodeSet, quality: QualityFunction | None = None) -> NodeSet:
    """Add frontier nodes adjacent to more than 2/3 of the members."""
    result = node_set.thaw_copy(quality)
    bar = FLUFF_RATIO * node_set.size
    additions = [n for n in node_set.frontier() if node_set.link_count(n) > bar]
    for node in additions:
        result.add(node)
    return result.freeze()


def has_k_core(node_set: NodeSet, k: int) -> bool:
    """Whether the induced subgraph contains a non-empty k-core."""
    if k <= 0:
        return True
    if node_set.size <= k:
        return False
    sub, _ = node_set.graph.to_igraph(node_set.members)
    return max(sub.coreness()) >= k


def passes_size_and_density(node_set: NodeSet, min_size: int, min_density: float) -> bool:
    if node_set.size < max(min_size, 2):
        return False
    return node_set.density >= min_density


class PostProcessingService:
    """Apply the configured refinements and filters to merged node sets."""

    def __init__(self, params: AlgorithmParameters, quality: QualityFunction | None = None):
        self._params = params
        self._quality = quality

    def process(self, node_sets: Iterable[NodeSet]) -> list[NodeSet]:
        params = self._params
        kept: list[NodeSet] = []
        dropped_k_core = dropped_size_density = 0
        total = 0

        for node_set in node_sets:
            total += 1
            current = node_set

            if params.haircut_needed:
                current = haircut(
                    current, params.haircut_threshold, params.haircut_policy, self._quality
                )
            if params.fluff_clusters:
                current = fluff(current, self._quality)
            if params.k_core_needed and not has_k_core(current, params.k_core_threshold):
                dropped_k_core += 1
                continue
            if not passes_size_and_density(current, params.min_size, params.min_density):
                dropped_size_density += 1
                continue
            kept.append(current)

        log.info(
            "Post-processing: %d set(s) in, %d kept (%d failed k-core, %d failed size/density)",
            total,
            len(kept),
            dropped_k_core,
            dropped_size_density,
        )
        return kept
