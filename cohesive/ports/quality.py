"""Port: scoring function for candidate node sets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cohesive.domain.models import NodeSet


class QualityFunction(ABC):
    """Score a node set and the effect of single-node moves on that score.

    The gain methods must work from the node set's cached aggregates so a
    move can be evaluated without touching the other members.
    """

    @abstractmethod
    def score(self, node_set: "NodeSet") -> float:
        """Return the quality of *node_set*; the empty set scores 0."""

    @abstractmethod
    def addition_gain(self, node_set: "NodeSet", node: int) -> float:
        """Return ``score(set + {node}) - score(set)`` for a non-member."""

    @abstractmethod
    def removal_gain(self, node_set: "NodeSet", node: int) -> float:
        """Return ``score(set - {node}) - score(set)`` for a member."""
