"""Tests for the greedy growth engine."""

import pytest

from cohesive.adapters.quality.cohesiveness import CohesivenessFunction
from cohesive.domain.graph import Graph
from cohesive.domain.models import NodeSet
from cohesive.services.growth import GreedyGrowthService


class TestGreedyGrowth:
    def test_grows_to_clique(self, two_cliques, cohesiveness):
        svc = GreedyGrowthService(two_cliques, cohesiveness)
        grown = svc.grow([0])
        assert grown.members == frozenset({0, 1, 2, 3})
        assert grown.quality == pytest.approx(6.0 / 14.1)
        assert grown.frozen

    def test_bridge_node_joins_stronger_side(self, two_cliques, cohesiveness):
        svc = GreedyGrowthService(two_cliques, cohesiveness)
        assert svc.grow([3]).members == frozenset({0, 1, 2, 3})
        assert svc.grow([4]).members == frozenset({4, 5, 6, 7})

    def test_removes_weak_seed_members(self, two_cliques, cohesiveness):
        svc = GreedyGrowthService(two_cliques, cohesiveness)
        grown = svc.grow([0, 1, 2, 3, 4])
        assert grown.members == frozenset({0, 1, 2, 3})

    def test_seed_not_modified(self, two_cliques, cohesiveness):
        seed = NodeSet(two_cliques, [0])
        GreedyGrowthService(two_cliques, cohesiveness).grow(seed)
        assert seed.members == frozenset({0})

    def test_idempotent(self, two_cliques, cohesiveness):
        svc = GreedyGrowthService(two_cliques, cohesiveness)
        first = svc.grow([5])
        second = svc.grow(first)
        assert second.members == first.members
        assert second.quality == pytest.approx(first.quality)

    def test_isolated_node_unchanged(self, clique_with_isolated, cohesiveness):
        grown = GreedyGrowthService(clique_with_isolated, cohesiveness).grow([5])
        assert grown.members == frozenset({5})
        assert grown.quality == 0.0

    def test_empty_seed(self, two_cliques, cohesiveness):
        grown = GreedyGrowthService(two_cliques, cohesiveness).grow([])
        assert grown.size == 0

    def test_quality_never_below_seed(self, two_cliques, cohesiveness):
        svc = GreedyGrowthService(two_cliques, cohesiveness)
        for node in range(8):
            seed = NodeSet(two_cliques, [node], quality_function=cohesiveness)
            assert svc.grow(seed).quality >= seed.quality

    def test_ties_broken_by_lowest_index(self):
        # two 4-cliques sharing node 0: from node 0 both sides tie
        edges = [
            (u, v, 1.0)
            for group in ([0, 1, 2, 3], [0, 4, 5, 6])
            for i, u in enumerate(group)
            for v in group[i + 1:]
        ]
        g = Graph.from_edges(7, edges)
        grown = GreedyGrowthService(g, CohesivenessFunction(node_penalty=2.0)).grow([0])
        assert grown.members == frozenset({0, 1, 2, 3})

    def test_zero_penalty_grows_to_component(self, clique_with_isolated):
        svc = GreedyGrowthService(clique_with_isolated, CohesivenessFunction(node_penalty=0.0))
        assert svc.grow([2]).members == frozenset({0, 1, 2, 3})
