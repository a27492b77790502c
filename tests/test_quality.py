"""Tests for the cohesiveness quality function."""

import pytest

from cohesive.adapters.quality.cohesiveness import CohesivenessFunction
from cohesive.domain.graph import Graph
from cohesive.domain.models import NodeSet


class TestCohesiveness:
    def test_empty_set_scores_zero(self, two_cliques, cohesiveness):
        assert cohesiveness.score(NodeSet(two_cliques)) == 0.0

    def test_formula(self, two_cliques, cohesiveness):
        ns = NodeSet(two_cliques, [0, 1, 2, 3])
        assert cohesiveness.score(ns) == pytest.approx(6.0 / (6.0 + 0.1 + 2.0 * 4))

    def test_penalty_discounts_single_edge(self):
        g = Graph.from_edges(2, [(0, 1, 5.0)])
        ns = NodeSet(g, [0, 1])
        assert CohesivenessFunction(0.0).score(ns) == pytest.approx(1.0)
        assert CohesivenessFunction(2.0).score(ns) == pytest.approx(5.0 / 9.0)

    def test_isolated_node_zero_denominator(self, clique_with_isolated):
        ns = NodeSet(clique_with_isolated, [5])
        assert CohesivenessFunction(0.0).score(ns) == 0.0

    def test_non_negative(self, two_cliques, cohesiveness):
        for members in ([0], [0, 4], [3, 4, 5], [0, 1, 2, 3, 4, 5, 6, 7]):
            assert cohesiveness.score(NodeSet(two_cliques, members)) >= 0.0

    @pytest.mark.parametrize("members,node", [([0, 1], 2), ([0, 1, 2, 3], 4), ([3], 4), ([], 0)])
    def test_addition_gain_matches_recompute(self, two_cliques, cohesiveness, members, node):
        ns = NodeSet(two_cliques, members, quality_function=cohesiveness)
        after = NodeSet(two_cliques, members + [node])
        expected = cohesiveness.score(after) - cohesiveness.score(ns)
        assert cohesiveness.addition_gain(ns, node) == pytest.approx(expected)

    @pytest.mark.parametrize("members,node", [([0, 1, 2], 2), ([0, 1, 2, 3, 4], 4), ([3, 4], 3)])
    def test_removal_gain_matches_recompute(self, two_cliques, cohesiveness, members, node):
        ns = NodeSet(two_cliques, members, quality_function=cohesiveness)
        after = NodeSet(two_cliques, [m for m in members if m != node])
        expected = cohesiveness.score(after) - cohesiveness.score(ns)
        assert cohesiveness.removal_gain(ns, node) == pytest.approx(expected)

    def test_removing_last_member_returns_to_zero(self, two_cliques, cohesiveness):
        ns = NodeSet(two_cliques, [0], quality_function=cohesiveness)
        assert cohesiveness.removal_gain(ns, 0) == pytest.approx(-ns.quality)
