"""Read-only tabular projection over a clustering result.

Presentation layers (terminal tables, spreadsheets, GUI grids) read rows
from here; nothing in the clustering pipeline depends on this module.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from cohesive.domain.models import ClusteringResult, NodeSet

SIMPLE_COLUMNS = ("Cluster", "Details")
DETAILED_COLUMNS = ("Cluster", "Nodes", "Density", "In-weight", "Out-weight", "Quality")


class NodeSetTable:
    """Rows of node sets in simple (two-column) or detailed mode."""

    def __init__(self, node_sets: ClusteringResult | Iterable[NodeSet], *, detailed: bool = False):
        self._node_sets = list(node_sets)
        # details strings are computed once, rows are re-read often
        self._details = [ns.details() for ns in self._node_sets]
        self._detailed = detailed

    @property
    def detailed(self) -> bool:
        return self._detailed

    def set_detailed_mode(self, detailed: bool) -> None:
        self._detailed = detailed

    @property
    def column_names(self) -> tuple[str, ...]:
        return DETAILED_COLUMNS if self._detailed else SIMPLE_COLUMNS

    @property
    def column_count(self) -> int:
        return len(self.column_names)

    @property
    def row_count(self) -> int:
        return len(self._node_sets)

    def node_set_at(self, row: int) -> NodeSet:
        return self._node_sets[row]

    def value_at(self, row: int, col: int) -> Any:
        if not 0 <= col < self.column_count:
            raise IndexError(f"Column {col} out of range for {self.column_count} columns")
        node_set = self._node_sets[row]
        if col == 0:
            return str(node_set)
        if not self._detailed:
            return self._details[row]
        return (
            node_set.size,
            node_set.density,
            node_set.internal_weight,
            node_set.boundary_weight,
            node_set.quality,
        )[col - 1]

    def rows(self) -> list[tuple[Any, ...]]:
        return [
            tuple(self.value_at(r, c) for c in range(self.column_count))
            for r in range(self.row_count)
        ]

    def records(self) -> list[dict[str, Any]]:
        """Rows keyed by column name, in the current mode."""
        names = self.column_names
        return [dict(zip(names, row)) for row in self.rows()]
