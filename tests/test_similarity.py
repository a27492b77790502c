"""Tests for the four node-set similarity formulas."""

import pytest

from cohesive.adapters.similarity.dice import DiceSimilarity
from cohesive.adapters.similarity.jaccard import JaccardSimilarity
from cohesive.adapters.similarity.match import MatchingScore
from cohesive.adapters.similarity.simpson import SimpsonCoefficient
from cohesive.domain.graph import Graph
from cohesive.domain.models import NodeSet

SET1 = {1, 2, 3, 4, 5, 6, 7, 8}
SET2 = {2, 4, 6, 9, 10}
SET3 = {9, 10, 11, 12}

ALL_FUNCTIONS = [MatchingScore(), JaccardSimilarity(), DiceSimilarity(), SimpsonCoefficient()]


class TestDice:
    def test_reference_values(self):
        sim = DiceSimilarity()
        assert sim.similarity(SET1, SET1) == pytest.approx(1.0)
        assert sim.similarity(SET1, SET2) == pytest.approx(6 / 13.0)
        assert sim.similarity(SET1, SET3) == pytest.approx(0.0)
        assert sim.similarity(SET2, SET3) == pytest.approx(4 / 9.0)
        assert sim.similarity(SET3, SET2) == pytest.approx(4 / 9.0)


class TestOtherFormulas:
    def test_match(self):
        sim = MatchingScore()
        assert sim.similarity(SET1, SET2) == pytest.approx(3 / 8.0)
        assert sim.similarity(SET2, SET3) == pytest.approx(2 / 5.0)

    def test_jaccard(self):
        sim = JaccardSimilarity()
        assert sim.similarity(SET1, SET2) == pytest.approx(3 / 10.0)
        assert sim.similarity(SET2, SET3) == pytest.approx(2 / 7.0)

    def test_simpson(self):
        sim = SimpsonCoefficient()
        assert sim.similarity(SET1, SET2) == pytest.approx(3 / 5.0)
        assert sim.similarity(SET2, SET3) == pytest.approx(2 / 4.0)
        assert sim.similarity({1, 2}, SET1) == pytest.approx(1.0)


class TestSimilarityProperties:
    @pytest.mark.parametrize("sim", ALL_FUNCTIONS, ids=lambda s: s.name)
    def test_commutative(self, sim):
        for a in (SET1, SET2, SET3):
            for b in (SET1, SET2, SET3):
                assert sim.similarity(a, b) == pytest.approx(sim.similarity(b, a))

    @pytest.mark.parametrize("sim", ALL_FUNCTIONS, ids=lambda s: s.name)
    def test_identity(self, sim):
        for a in (SET1, SET2, SET3):
            assert sim.similarity(a, a) == pytest.approx(1.0)

    @pytest.mark.parametrize("sim", ALL_FUNCTIONS, ids=lambda s: s.name)
    def test_bounded(self, sim):
        for a in (SET1, SET2, SET3):
            for b in (SET1, SET2, SET3):
                assert 0.0 <= sim.similarity(a, b) <= 1.0

    @pytest.mark.parametrize("sim", ALL_FUNCTIONS, ids=lambda s: s.name)
    def test_empty_sets(self, sim):
        assert sim.similarity(set(), set()) == 1.0
        assert sim.similarity(set(), SET1) == 0.0

    def test_accepts_node_sets(self):
        g = Graph.from_edges(13, [])
        a = NodeSet(g, SET1)
        b = NodeSet(g, SET2)
        assert DiceSimilarity().similarity(a, b) == pytest.approx(6 / 13.0)
