"""Overlapping cohesive-group detection in weighted graphs.

Greedy seeded growth on a cohesiveness score, followed by redundancy
resolution and size/density filtering.
"""

from __future__ import annotations

import logging

from cohesive.domain.errors import ClusteringCancelled, ConfigurationError, GraphValidationError
from cohesive.domain.graph import Graph
from cohesive.domain.models import AlgorithmParameters, ClusteringResult, NodeSet
from cohesive.services.orchestrator import ClusteringOrchestrator

__all__ = [
    "AlgorithmParameters",
    "ClusteringCancelled",
    "ClusteringOrchestrator",
    "ClusteringResult",
    "ConfigurationError",
    "Graph",
    "GraphValidationError",
    "NodeSet",
    "configure_logging",
]


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
