"""Shared test fixtures: sample graphs and wired adapters."""

from __future__ import annotations

import pytest

from cohesive.adapters.quality.cohesiveness import CohesivenessFunction
from cohesive.adapters.seeding.every_node import EveryNodeSeedGenerator
from cohesive.adapters.similarity.match import MatchingScore
from cohesive.domain.graph import Graph
from cohesive.domain.models import AlgorithmParameters
from cohesive.services.orchestrator import ClusteringOrchestrator


def clique_edges(nodes: list[int], weight: float = 1.0) -> list[tuple[int, int, float]]:
    return [(u, v, weight) for i, u in enumerate(nodes) for v in nodes[i + 1:]]


def make_orchestrator(params: AlgorithmParameters | None = None, **kwargs) -> ClusteringOrchestrator:
    params = params or AlgorithmParameters()
    return ClusteringOrchestrator(
        params,
        quality=kwargs.pop("quality", CohesivenessFunction(params.node_penalty)),
        similarity=kwargs.pop("similarity", MatchingScore()),
        seed_generator=kwargs.pop("seed_generator", EveryNodeSeedGenerator()),
        **kwargs,
    )


# ── Fixtures ──


@pytest.fixture
def cohesiveness():
    return CohesivenessFunction(node_penalty=2.0)


@pytest.fixture
def two_cliques():
    """Two unit-weight 4-cliques {0..3} and {4..7} joined by a weak 3-4 edge."""
    edges = clique_edges([0, 1, 2, 3]) + clique_edges([4, 5, 6, 7]) + [(3, 4, 0.1)]
    names = ["A1", "A2", "A3", "A4", "B1", "B2", "B3", "B4"]
    return Graph.from_edges(8, edges, names=names)


@pytest.fixture
def clique_with_isolated():
    """A 4-clique {0..3} plus isolated nodes 4 and 5."""
    return Graph.from_edges(6, clique_edges([0, 1, 2, 3]))


@pytest.fixture
def k4_with_pendant():
    """A 4-clique {0..3} with node 4 hanging off node 0."""
    return Graph.from_edges(5, clique_edges([0, 1, 2, 3]) + [(0, 4, 1.0)])


@pytest.fixture
def empty_graph():
    return Graph.from_edges(0, [])


@pytest.fixture
def twin_cliques():
    """Two disconnected unit-weight 4-cliques {0..3} and {4..7}."""
    return Graph.from_edges(8, clique_edges([0, 1, 2, 3]) + clique_edges([4, 5, 6, 7]))
