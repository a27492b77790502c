"""Weighted undirected graph over integer-indexed nodes.

The graph is immutable once built.  ``Graph.from_edges`` is the only
ingestion boundary: it validates the raw triples and folds repeated pairs
into a single edge before any clustering code sees them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

import numpy as np

from cohesive.domain.errors import GraphValidationError

log = logging.getLogger(__name__)


class Graph:
    """Adjacency-map graph with cached node strengths."""

    def __init__(
        self,
        node_count: int,
        adjacency: list[dict[int, float]],
        names: Sequence[str] | None = None,
    ):
        self._node_count = node_count
        self._adjacency = adjacency
        self._names = list(names) if names is not None else None

        strength = np.zeros(node_count, dtype=np.float64)
        for u, nbrs in enumerate(adjacency):
            strength[u] = sum(nbrs.values())
        self._strength = strength
        self._edge_count = sum(len(nbrs) for nbrs in adjacency) // 2

    # ── construction ──

    @classmethod
    def from_edges(
        cls,
        node_count: int,
        edges: Iterable[tuple[int, int, float]],
        names: Sequence[str] | None = None,
    ) -> "Graph":
        """Validate an edge list and build a graph from it.

        Raises:
            GraphValidationError: on a negative node count, a self-loop,
                an out-of-range endpoint, or a negative/non-finite weight,
                or when ``names`` does not match ``node_count``.
        """
        if node_count < 0:
            raise GraphValidationError(f"Node count must be non-negative, got {node_count}")
        if names is not None and len(names) != node_count:
            raise GraphValidationError(
                f"Expected {node_count} node names, got {len(names)}"
            )

        triples = list(edges)
        adjacency: list[dict[int, float]] = [{} for _ in range(node_count)]
        if not triples:
            return cls(node_count, adjacency, names)

        try:
            arr = np.asarray(triples, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise GraphValidationError(f"Malformed edge list: {exc}") from exc
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise GraphValidationError("Edges must be (source, target, weight) triples")

        src, dst, weight = arr[:, 0], arr[:, 1], arr[:, 2]
        if not (np.all(src == np.floor(src)) and np.all(dst == np.floor(dst))):
            raise GraphValidationError("Edge endpoints must be integer node indices")

        out_of_range = (src < 0) | (src >= node_count) | (dst < 0) | (dst >= node_count)
        if out_of_range.any():
            i = int(np.argmax(out_of_range))
            raise GraphValidationError(
                f"Edge {triples[i]!r} references a node outside 0..{node_count - 1}"
            )
        loops = src == dst
        if loops.any():
            i = int(np.argmax(loops))
            raise GraphValidationError(f"Self-loop not allowed: {triples[i]!r}")
        bad_weight = ~np.isfinite(weight) | (weight < 0)
        if bad_weight.any():
            i = int(np.argmax(bad_weight))
            raise GraphValidationError(f"Edge weight must be finite and >= 0: {triples[i]!r}")

        merged = 0
        for u, v, w in zip(src.astype(np.int64), dst.astype(np.int64), weight):
            u, v, w = int(u), int(v), float(w)
            if v in adjacency[u]:
                merged += 1
            adjacency[u][v] = adjacency[u].get(v, 0.0) + w
            adjacency[v][u] = adjacency[v].get(u, 0.0) + w

        if merged:
            log.debug("Summed %d repeated edge(s) into existing pairs", merged)

        graph = cls(node_count, adjacency, names)
        log.info("Built graph with %d nodes, %d edges", graph.node_count, graph.edge_count)
        return graph

    # ── accessors ──

    @property
    def node_count(self) -> int:
        return self._node_count

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def __len__(self) -> int:
        return self._node_count

    def nodes(self) -> range:
        return range(self._node_count)

    def neighbours(self, node: int) -> Iterator[tuple[int, float]]:
        """Yield ``(neighbour, weight)`` pairs for *node*."""
        return iter(self._adjacency[node].items())

    def weight(self, u: int, v: int) -> float:
        return self._adjacency[u].get(v, 0.0)

    def degree(self, node: int) -> int:
        return len(self._adjacency[node])

    def strength(self, node: int) -> float:
        """Total weight of the edges incident on *node*."""
        return float(self._strength[node])

    def name(self, node: int) -> str:
        if self._names is None:
            return str(node)
        return self._names[node]

    def edges(self) -> Iterator[tuple[int, int, float]]:
        """Yield each edge once as ``(u, v, weight)`` with ``u < v``."""
        for u, nbrs in enumerate(self._adjacency):
            for v in sorted(nbrs):
                if u < v:
                    yield u, v, nbrs[v]

    def to_igraph(self, nodes: Iterable[int] | None = None):
        """Export the (induced sub)graph to igraph.

        Returns:
            Tuple of (igraph.Graph, list[int]) where the list maps igraph
            vertex indices back to node indices of this graph.
        """
        import igraph as ig  # lazy

        if nodes is None:
            vertex_ids = list(self.nodes())
        else:
            vertex_ids = sorted(set(nodes))
        idx = {node: i for i, node in enumerate(vertex_ids)}

        edge_tuples = []
        weights = []
        for node in vertex_ids:
            for nbr, w in self._adjacency[node].items():
                if node < nbr and nbr in idx:
                    edge_tuples.append((idx[node], idx[nbr]))
                    weights.append(w)

        g = ig.Graph(n=len(vertex_ids), edges=edge_tuples, directed=False)
        g.vs["name"] = [self.name(node) for node in vertex_ids]
        g.es["weight"] = weights
        return g, vertex_ids
