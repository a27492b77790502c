"""Core domain models: node sets, algorithm parameters, run results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Iterator

from cohesive.domain.errors import ConfigurationError

if TYPE_CHECKING:
    from cohesive.domain.graph import Graph
    from cohesive.ports.quality import QualityFunction

log = logging.getLogger(__name__)


# ── Option enums ────────────────────────────────────────────────────────────


class _NamedOption(str, Enum):
    """String enum parsed case-insensitively from configuration values."""

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def parse(cls, value: Any) -> "_NamedOption":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = cls._aliases().get(key, key)
        for member in cls:
            if member.value == key:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ConfigurationError(
            f"Unknown {cls._label()}: {value!r} (expected one of: {choices})"
        )

    @classmethod
    def _label(cls) -> str:
        return cls.__name__


class MergingMethod(_NamedOption):
    MATCH = "match"
    JACCARD = "jaccard"
    DICE = "dice"
    SIMPSON = "simpson"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"meet/min": "simpson", "meet_min": "simpson"}

    @classmethod
    def _label(cls) -> str:
        return "merging method"


class SeedStrategy(_NamedOption):
    NODES = "nodes"
    EDGES = "edges"
    UNUSED_NODES = "unused_nodes"
    FIXED = "fixed"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"every_node": "nodes", "every_edge": "edges", "unused": "unused_nodes"}

    @classmethod
    def _label(cls) -> str:
        return "seed strategy"


class HaircutPolicy(_NamedOption):
    SINGLE_PASS = "single_pass"
    FIXED_POINT = "fixed_point"

    @classmethod
    def _label(cls) -> str:
        return "haircut policy"


class DedupMode(_NamedOption):
    DISCARD = "discard"
    UNION = "union"

    @classmethod
    def _label(cls) -> str:
        return "dedup mode"


# ── Parameters ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AlgorithmParameters:
    """Immutable per-run configuration bundle.

    The defaults are the ones that work reasonably for protein interaction
    networks.  Numeric bounds are clamped the same way regardless of where
    the values come from (YAML, env vars, or direct construction).
    """

    min_size: int = 3
    min_density: float = 0.3
    overlap_threshold: float = 0.8
    haircut_threshold: float = 0.0  # active only in (0, 1]
    k_core_threshold: int = 0  # active only when > 0
    node_penalty: float = 2.0
    fluff_clusters: bool = False
    merging_method: MergingMethod = MergingMethod.MATCH
    seed_strategy: SeedStrategy = SeedStrategy.NODES
    seeds: tuple[tuple[int, ...], ...] = ()  # used by the "fixed" strategy
    haircut_policy: HaircutPolicy = HaircutPolicy.SINGLE_PASS
    dedup_mode: DedupMode = DedupMode.DISCARD

    def __post_init__(self) -> None:
        object.__setattr__(self, "merging_method", MergingMethod.parse(self.merging_method))
        object.__setattr__(self, "seed_strategy", SeedStrategy.parse(self.seed_strategy))
        object.__setattr__(self, "haircut_policy", HaircutPolicy.parse(self.haircut_policy))
        object.__setattr__(self, "dedup_mode", DedupMode.parse(self.dedup_mode))

        try:
            object.__setattr__(self, "min_size", max(1, int(self.min_size)))
            object.__setattr__(self, "min_density", max(0.0, float(self.min_density)))
            object.__setattr__(self, "overlap_threshold", max(0.0, float(self.overlap_threshold)))
            object.__setattr__(self, "haircut_threshold", float(self.haircut_threshold))
            object.__setattr__(self, "k_core_threshold", int(self.k_core_threshold))
            object.__setattr__(self, "node_penalty", float(self.node_penalty))
            object.__setattr__(self, "fluff_clusters", bool(self.fluff_clusters))
            object.__setattr__(
                self, "seeds", tuple(tuple(int(n) for n in seed) for seed in self.seeds)
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid algorithm parameter: {exc}") from exc

        if self.seed_strategy is SeedStrategy.FIXED and not self.seeds:
            raise ConfigurationError("The 'fixed' seed strategy needs a non-empty seed list")

    @property
    def haircut_needed(self) -> bool:
        return 0.0 < self.haircut_threshold <= 1.0

    @property
    def k_core_needed(self) -> bool:
        return self.k_core_threshold > 0

    def describe(self) -> str:
        lines = [
            f"Minimum size: {self.min_size}",
            f"Minimum density: {self.min_density}",
            f"Overlap threshold: {self.overlap_threshold}",
            f"Haircut threshold: {self.haircut_threshold} ({self.haircut_policy.value})",
            f"K-core threshold: {self.k_core_threshold}",
            f"Node penalty: {self.node_penalty}",
            f"Fluff clusters: {self.fluff_clusters}",
            f"Merging method: {self.merging_method.value} ({self.dedup_mode.value})",
            f"Seed generator: {self.seed_strategy.value}",
        ]
        return "\n".join(lines)


# ── Node sets ───────────────────────────────────────────────────────────────


class NodeSet:
    """A candidate cluster with incrementally maintained aggregates.

    Every mutation goes through :meth:`add` / :meth:`remove`, which update
    the internal weight, boundary weight, per-node link weights and (when
    a quality function is attached) the cached quality in one step.
    """

    __slots__ = (
        "_graph",
        "_quality_fn",
        "_members",
        "_internal",
        "_boundary",
        "_link_weight",
        "_link_count",
        "_quality",
        "_frozen",
    )

    def __init__(
        self,
        graph: "Graph",
        members: Iterable[int] = (),
        quality_function: "QualityFunction | None" = None,
    ):
        self._graph = graph
        self._quality_fn = quality_function
        self._members: set[int] = set()
        self._internal = 0.0
        self._boundary = 0.0
        # weight / edge count between a node and the current members,
        # tracked for members and for frontier nodes alike
        self._link_weight: dict[int, float] = {}
        self._link_count: dict[int, int] = {}
        self._quality = 0.0
        self._frozen = False

        for node in members:
            if node not in self._members:
                self._apply_add(node)
        self._refresh_quality()

    # ── mutation ──

    def add(self, node: int) -> bool:
        """Add *node*; return False if it was already a member."""
        self._check_mutable()
        if node in self._members:
            return False
        self._apply_add(node)
        self._refresh_quality()
        return True

    def remove(self, node: int) -> bool:
        """Remove *node*; return False if it was not a member."""
        self._check_mutable()
        if node not in self._members:
            return False
        self._apply_remove(node)
        self._refresh_quality()
        return True

    def freeze(self) -> "NodeSet":
        self._frozen = True
        return self

    def thaw_copy(self, quality_function: "QualityFunction | None" = None) -> "NodeSet":
        """Return a mutable copy, optionally re-bound to another quality function."""
        qf = quality_function if quality_function is not None else self._quality_fn
        clone = NodeSet.__new__(NodeSet)
        clone._graph = self._graph
        clone._quality_fn = qf
        clone._members = set(self._members)
        clone._internal = self._internal
        clone._boundary = self._boundary
        clone._link_weight = dict(self._link_weight)
        clone._link_count = dict(self._link_count)
        clone._quality = self._quality
        clone._frozen = False
        if qf is not self._quality_fn:
            clone._refresh_quality()
        return clone

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("NodeSet is frozen")

    def _apply_add(self, node: int) -> None:
        graph = self._graph
        w_in = self._link_weight.get(node, 0.0)
        self._internal += w_in
        self._boundary += graph.strength(node) - 2.0 * w_in
        self._members.add(node)
        for nbr, w in graph.neighbours(node):
            self._link_weight[nbr] = self._link_weight.get(nbr, 0.0) + w
            self._link_count[nbr] = self._link_count.get(nbr, 0) + 1

    def _apply_remove(self, node: int) -> None:
        graph = self._graph
        w_in = self._link_weight.get(node, 0.0)
        self._members.discard(node)
        for nbr, w in graph.neighbours(node):
            count = self._link_count[nbr] - 1
            if count == 0:
                del self._link_count[nbr]
                del self._link_weight[nbr]
            else:
                self._link_count[nbr] = count
                self._link_weight[nbr] -= w
        if self._members:
            self._internal = max(0.0, self._internal - w_in)
            self._boundary = max(0.0, self._boundary - graph.strength(node) + 2.0 * w_in)
        else:
            self._internal = 0.0
            self._boundary = 0.0

    def _refresh_quality(self) -> None:
        if self._quality_fn is None:
            self._quality = 0.0
        else:
            self._quality = self._quality_fn.score(self)

    # ── cached aggregates ──

    @property
    def graph(self) -> "Graph":
        return self._graph

    @property
    def members(self) -> frozenset[int]:
        return frozenset(self._members)

    @property
    def size(self) -> int:
        return len(self._members)

    @property
    def internal_weight(self) -> float:
        return self._internal

    @property
    def boundary_weight(self) -> float:
        return self._boundary

    @property
    def quality(self) -> float:
        return self._quality

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def density(self) -> float:
        """Internal weight over the number of possible member pairs."""
        n = len(self._members)
        if n < 2:
            return 0.0
        return self._internal / (n * (n - 1) / 2.0)

    def link_weight(self, node: int) -> float:
        """Total weight of the edges between *node* and the members."""
        return self._link_weight.get(node, 0.0)

    def link_count(self, node: int) -> int:
        """Number of members adjacent to *node*."""
        return self._link_count.get(node, 0)

    def frontier(self) -> list[int]:
        """Non-members with at least one edge into the set, ascending."""
        return sorted(n for n in self._link_count if n not in self._members)

    # ── set behaviour ──

    def __contains__(self, node: object) -> bool:
        return node in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._members))

    def intersection_size(self, other: "NodeSet | Iterable[int]") -> int:
        other_members = other._members if isinstance(other, NodeSet) else set(other)
        small, large = sorted((self._members, other_members), key=len)
        return sum(1 for n in small if n in large)

    def first_node(self) -> int:
        return min(self._members) if self._members else -1

    # ── presentation ──

    def names(self) -> list[str]:
        return [self._graph.name(n) for n in self]

    def details(self) -> str:
        return (
            f"{self.size} nodes, density {self.density:.4f}, "
            f"quality {self.quality:.4f}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "members": list(self),
            "names": self.names(),
            "size": self.size,
            "density": self.density,
            "internal_weight": self.internal_weight,
            "boundary_weight": self.boundary_weight,
            "quality": self.quality,
        }

    def __str__(self) -> str:
        return " ".join(self.names())

    def __repr__(self) -> str:
        return f"NodeSet({sorted(self._members)!r}, quality={self._quality:.4f})"


# ── Results ─────────────────────────────────────────────────────────────────


@dataclass
class ClusteringResult:
    """Ordered final node sets of one run plus per-stage counts."""

    clusters: list[NodeSet] = field(default_factory=list)
    parameters: AlgorithmParameters = field(default_factory=AlgorithmParameters)
    seed_count: int = 0
    candidate_count: int = 0
    merged_count: int = 0

    def __len__(self) -> int:
        return len(self.clusters)

    def __iter__(self) -> Iterator[NodeSet]:
        return iter(self.clusters)

    def __getitem__(self, index: int) -> NodeSet:
        return self.clusters[index]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self.clusters]
