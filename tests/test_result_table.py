"""Tests for the tabular result projection."""

import pytest

from cohesive.services.result_table import DETAILED_COLUMNS, SIMPLE_COLUMNS, NodeSetTable
from tests.conftest import make_orchestrator


@pytest.fixture
def result(two_cliques):
    return make_orchestrator().run(two_cliques)


class TestNodeSetTable:
    def test_simple_mode(self, result):
        table = NodeSetTable(result)
        assert table.column_names == SIMPLE_COLUMNS
        assert table.row_count == 2
        names = {table.value_at(r, 0) for r in range(2)}
        assert names == {"A1 A2 A3 A4", "B1 B2 B3 B4"}
        assert "4 nodes" in table.value_at(0, 1)

    def test_detailed_mode(self, result):
        table = NodeSetTable(result, detailed=True)
        assert table.column_names == DETAILED_COLUMNS
        row = table.rows()[0]
        assert row[1] == 4
        assert row[2] == pytest.approx(1.0)
        assert row[3] == pytest.approx(6.0)
        assert row[4] == pytest.approx(0.1)
        assert row[5] == pytest.approx(result[0].quality)

    def test_mode_switch(self, result):
        table = NodeSetTable(result)
        table.set_detailed_mode(True)
        assert table.column_count == 6
        table.set_detailed_mode(False)
        assert table.column_count == 2

    def test_records(self, result):
        records = NodeSetTable(result, detailed=True).records()
        assert records[0]["Nodes"] == 4
        assert set(records[0]) == set(DETAILED_COLUMNS)

    def test_node_set_at(self, result):
        assert NodeSetTable(result).node_set_at(1) is result[1]

    def test_bad_column(self, result):
        with pytest.raises(IndexError):
            NodeSetTable(result).value_at(0, 2)

    def test_does_not_touch_result(self, result):
        before = [c.members for c in result]
        NodeSetTable(result, detailed=True).rows()
        assert [c.members for c in result] == before
