"""Orchestrator: seeds -> greedy growth -> merging -> post-processing.

Growth of different seeds shares nothing but the read-only graph, so it
can fan out over a thread pool.  Merging is history dependent and runs
on the single collected candidate list.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from itertools import islice

from cohesive.domain.errors import ClusteringCancelled
from cohesive.domain.graph import Graph
from cohesive.domain.models import AlgorithmParameters, ClusteringResult, NodeSet
from cohesive.ports.quality import QualityFunction
from cohesive.ports.seeding import SeedGenerator
from cohesive.ports.similarity import SimilarityFunction
from cohesive.services.growth import GreedyGrowthService
from cohesive.services.merging import MergingService
from cohesive.services.postprocessing import PostProcessingService

log = logging.getLogger(__name__)


class ClusteringOrchestrator:
    """Top-level entry point for one clustering run.

    The quality, similarity and seeding strategies are chosen once, at
    construction; the stage loops never branch on which variant is used.
    """

    def __init__(
        self,
        params: AlgorithmParameters,
        *,
        quality: QualityFunction,
        similarity: SimilarityFunction,
        seed_generator: SeedGenerator,
        workers: int = 1,
        batch_size: int = 256,
    ):
        self._params = params
        self._quality = quality
        self._similarity = similarity
        self._seed_generator = seed_generator
        self._workers = max(1, int(workers))
        self._batch_size = max(1, int(batch_size))

    @property
    def params(self) -> AlgorithmParameters:
        return self._params

    def run(self, graph: Graph, stop_event: threading.Event | None = None) -> ClusteringResult:
        """Cluster *graph* and return the final node sets.

        Raises:
            ClusteringCancelled: if *stop_event* is set before growth ends.
        """
        log.info("Clustering parameters:\n%s", self._params.describe())
        log.info(
            "Growing clusters on %d nodes / %d edges (seeds: %s, workers: %d)",
            graph.node_count,
            graph.edge_count,
            self._seed_generator,
            self._workers,
        )

        growth = GreedyGrowthService(graph, self._quality)
        if self._seed_generator.sequential or self._workers == 1:
            seed_count, candidates = self._grow_sequential(graph, growth, stop_event)
        else:
            seed_count, candidates = self._grow_parallel(graph, growth, stop_event)

        candidates = [c for c in candidates if c.size > 0]
        log.info("Grew %d candidate(s) from %d seed(s)", len(candidates), seed_count)

        merger = MergingService(
            self._similarity,
            self._params.overlap_threshold,
            mode=self._params.dedup_mode,
            quality=self._quality,
        )
        merged = merger.merge(candidates)

        final = PostProcessingService(self._params, self._quality).process(merged)
        log.info("Clustering finished: %d cluster(s)", len(final))

        return ClusteringResult(
            clusters=final,
            parameters=self._params,
            seed_count=seed_count,
            candidate_count=len(candidates),
            merged_count=len(merged),
        )

    # ── growth drivers ──

    def _grow_sequential(
        self,
        graph: Graph,
        growth: GreedyGrowthService,
        stop_event: threading.Event | None,
    ) -> tuple[int, list[NodeSet]]:
        claimed: set[int] = set()
        candidates: list[NodeSet] = []
        seed_count = 0
        for seed in self._seed_generator.seeds(graph, claimed):
            _check_stop(stop_event, seed_count)
            seed_count += 1
            grown = growth.grow(seed)
            claimed.update(grown.members)
            candidates.append(grown)
        return seed_count, candidates

    def _grow_parallel(
        self,
        graph: Graph,
        growth: GreedyGrowthService,
        stop_event: threading.Event | None,
    ) -> tuple[int, list[NodeSet]]:
        # seeds are pulled lazily in batches; every worker checks the stop
        # event before growing its seed
        seeds = iter(self._seed_generator.seeds(graph, frozenset()))
        candidates: list[NodeSet] = []
        seed_count = 0

        def grow_one(seed: NodeSet) -> NodeSet:
            _check_stop(stop_event, seed_count)
            return growth.grow(seed)

        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            while True:
                _check_stop(stop_event, seed_count)
                batch = list(islice(seeds, self._batch_size))
                if not batch:
                    break
                candidates.extend(pool.map(grow_one, batch))
                seed_count += len(batch)
        return seed_count, candidates


def _check_stop(stop_event: threading.Event | None, seeds_done: int) -> None:
    if stop_event is not None and stop_event.is_set():
        log.warning("Clustering cancelled after %d seed(s)", seeds_done)
        raise ClusteringCancelled(f"Cancelled after {seeds_done} seed(s)")
