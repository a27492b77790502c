"""Service: redundancy resolution between grown node sets.

Candidates are visited best-first (quality desc, then size desc, then
lowest first node).  A candidate whose similarity to an already accepted
set exceeds the overlap threshold is either dropped (``discard``) or
folded into that accepted set (``union``).  Either way no two returned
sets are more similar than the threshold.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cohesive.domain.models import DedupMode, NodeSet
from cohesive.ports.quality import QualityFunction
from cohesive.ports.similarity import SimilarityFunction

log = logging.getLogger(__name__)


def candidate_order(node_set: NodeSet) -> tuple[float, int, int]:
    """Sort key placing the preferred candidate first."""
    return (-node_set.quality, -node_set.size, node_set.first_node())


class MergingService:
    """Deduplicate candidate node sets against a similarity threshold."""

    def __init__(
        self,
        similarity: SimilarityFunction,
        overlap_threshold: float,
        *,
        mode: DedupMode = DedupMode.DISCARD,
        quality: QualityFunction | None = None,
    ):
        if mode is DedupMode.UNION and quality is None:
            raise ValueError("Union merging needs a quality function to rescore merged sets")
        self._similarity = similarity
        self._threshold = overlap_threshold
        self._mode = mode
        self._quality = quality

    def merge(self, candidates: Sequence[NodeSet]) -> list[NodeSet]:
        ordered = sorted((c for c in candidates if c.size > 0), key=candidate_order)
        ordered = _drop_exact_duplicates(ordered)

        if self._mode is DedupMode.UNION:
            accepted = self._merge_union(ordered)
        else:
            accepted = self._merge_discard(ordered)

        log.info(
            "Merging (%s, %s > %.3f): %d candidate(s) -> %d set(s)",
            self._mode.value,
            self._similarity.name or type(self._similarity).__name__,
            self._threshold,
            len(candidates),
            len(accepted),
        )
        return accepted

    # ── discard ──

    def _merge_discard(self, ordered: list[NodeSet]) -> list[NodeSet]:
        accepted: list[NodeSet] = []
        index: dict[int, list[int]] = {}  # node -> positions in accepted

        for candidate in ordered:
            if self._find_overlapping(candidate, accepted, index) is not None:
                continue
            position = len(accepted)
            accepted.append(candidate)
            for node in candidate.members:
                index.setdefault(node, []).append(position)
        return accepted

    def _find_overlapping(
        self,
        candidate: NodeSet,
        accepted: list[NodeSet],
        index: dict[int, list[int]],
    ) -> int | None:
        """Return the first accepted position exceeding the threshold, if any.

        Only accepted sets sharing at least one node are compared; disjoint
        sets have similarity 0 and can never exceed a non-negative threshold.
        """
        shared: set[int] = set()
        for node in candidate.members:
            shared.update(index.get(node, ()))
        for position in sorted(shared):
            if self._similarity.similarity(candidate, accepted[position]) > self._threshold:
                return position
        return None

    # ── union ──

    def _merge_union(self, ordered: list[NodeSet]) -> list[NodeSet]:
        accepted: list[NodeSet | None] = []

        for candidate in ordered:
            target = self._first_similar(candidate, accepted)
            if target is None:
                accepted.append(candidate)
                continue

            merged = accepted[target].thaw_copy(self._quality)
            for node in candidate.members:
                merged.add(node)
            # the grown set may now overlap others; absorb them until stable
            while True:
                other = self._first_similar(merged, accepted, skip=target)
                if other is None:
                    break
                for node in accepted[other].members:
                    merged.add(node)
                accepted[other] = None
            accepted[target] = merged.freeze()

        result = [s for s in accepted if s is not None]
        result.sort(key=candidate_order)
        return result

    def _first_similar(
        self,
        node_set: NodeSet,
        accepted: list[NodeSet | None],
        skip: int = -1,
    ) -> int | None:
        for position, other in enumerate(accepted):
            if other is None or position == skip:
                continue
            if self._similarity.similarity(node_set, other) > self._threshold:
                return position
        return None


def _drop_exact_duplicates(ordered: list[NodeSet]) -> list[NodeSet]:
    seen: set[frozenset[int]] = set()
    unique: list[NodeSet] = []
    for node_set in ordered:
        key = node_set.members
        if key in seen:
            continue
        seen.add(key)
        unique.append(node_set)
    return unique
