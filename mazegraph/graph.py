"""Weighted graph answering repeated shortest-path queries between labelled vertices."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from .algorithms.dijkstra import ShortestPathEngine, ShortestPathRun
from .algorithms.path_cost import compute_route_cost, unwind_predecessors
from .errors import InternalInvariantError, NoRouteError
from .labels import VertexLabels
from .matrix import (
    ABSENT,
    MAX_ORDER,
    MatrixShape,
    is_symmetric,
    transpose,
    validate_distance_matrix,
)

logger = logging.getLogger(__name__)


class ShortestRoute(NamedTuple):
    distance: float
    route: List[int]


class Graph:
    """Immutable weighted graph with memoized Dijkstra runs.

    ``distance_matrix`` may be square (possibly directed), lower triangular or
    upper triangular; ``ABSENT`` marks a missing edge. ``vertex_labels[i]`` is
    the caller's label for row ``i``. All public inputs and outputs use those
    labels.

    Runs are cached per root vertex and never recomputed. For an asymmetric
    matrix, runs rooted at a destination are computed over the reversed edges,
    so they describe routes into that destination.
    """

    def __init__(
        self,
        distance_matrix: Sequence[Sequence[Any]],
        vertex_labels: Sequence[int],
        *,
        max_order: int = MAX_ORDER,
    ) -> None:
        matrix = validate_distance_matrix(distance_matrix, max_order=max_order)
        labels = VertexLabels(vertex_labels, matrix.order)
        directed = not is_symmetric(matrix)

        outbound = ShortestPathEngine(matrix.weights, matrix.adjacency)
        if directed:
            reversed_matrix = transpose(matrix)
            inbound = ShortestPathEngine(reversed_matrix.weights, reversed_matrix.adjacency)
        else:
            inbound = outbound

        self._matrix = matrix
        self._labels = labels
        self._directed = directed
        self._outbound = outbound
        self._inbound = inbound
        logger.debug(
            "Built %s graph of order %d from a %s matrix.",
            "directed" if directed else "undirected",
            matrix.order,
            matrix.shape.value,
        )

    @classmethod
    def from_networkx(cls, nx_graph: Any, weight: str = "weight") -> "Graph":
        """Build a graph from a networkx graph whose nodes are integer labels."""

        nodes = list(nx_graph.nodes())
        dense = nx.to_numpy_array(nx_graph, nodelist=nodes, weight=weight, nonedge=np.nan)
        rows = [
            [ABSENT if np.isnan(value) else float(value) for value in row]
            for row in dense
        ]
        return cls(rows, nodes)

    # ------------------------------------------------------------------ structure
    @property
    def order(self) -> int:
        return self._matrix.order

    @property
    def labels(self) -> Tuple[int, ...]:
        return self._labels.internal_to_external

    @property
    def shape(self) -> MatrixShape:
        """Shape of the matrix the graph was built from."""
        return self._matrix.shape

    @property
    def is_directed(self) -> bool:
        return self._directed

    def __len__(self) -> int:
        return self.order

    def __contains__(self, label: object) -> bool:
        return label in self._labels

    def __repr__(self) -> str:
        return f"Graph(order={self.order}, directed={self._directed})"

    def is_adjacent(self, source_label: int, dest_label: int) -> bool:
        i = self._labels.to_internal(source_label)
        j = self._labels.to_internal(dest_label)
        return bool(self._matrix.adjacency[i, j])

    def weight(self, source_label: int, dest_label: int) -> Optional[float]:
        """Weight of the edge from ``source_label`` to ``dest_label``, or None."""

        i = self._labels.to_internal(source_label)
        j = self._labels.to_internal(dest_label)
        if not self._matrix.adjacency[i, j]:
            return None
        return float(self._matrix.weights[i, j])

    def neighbours(self, label: int) -> List[int]:
        i = self._labels.to_internal(label)
        return self._labels.to_external_many(np.flatnonzero(self._matrix.adjacency[i]))

    def distance_matrix(self) -> List[List[Optional[float]]]:
        """Canonical square matrix in internal order, ABSENT for no edge."""
        return self._matrix.to_rows()

    def route_cost(self, route: Sequence[int]) -> Optional[float]:
        """Total weight along a route of labels, or None if an edge is missing."""

        internal = np.asarray(self._labels.to_internal_many(route), dtype=np.int64)
        cost = compute_route_cost(internal, self._matrix.weights, self._matrix.adjacency)
        if np.isinf(cost):
            return None
        return float(cost)

    # ------------------------------------------------------------------ cache
    @property
    def run_count(self) -> int:
        """Number of Dijkstra runs computed over the graph's lifetime."""

        if self._directed:
            return self._outbound.run_count + self._inbound.run_count
        return self._outbound.run_count

    @property
    def cached_sources(self) -> Tuple[int, ...]:
        """Labels of vertices that root a cached run, in computation order."""

        roots: List[int] = []
        engines = (self._outbound, self._inbound) if self._directed else (self._outbound,)
        for engine in engines:
            for source in engine.cached_sources:
                label = self._labels.to_external(source)
                if label not in roots:
                    roots.append(label)
        return tuple(roots)

    def precompute(self, labels: Optional[Iterable[int]] = None) -> None:
        """Compute runs for ``labels`` (every vertex by default) ahead of queries.

        A fully precomputed graph serves every later query from its cache,
        which makes it safe to share between reader threads.
        """

        if labels is None:
            sources = list(range(self.order))
        else:
            sources = self._labels.to_internal_many(labels)
        self._outbound.precompute(sources)
        if self._directed:
            self._inbound.precompute(sources)

    # ------------------------------------------------------------------ queries
    def shortest_distance(
        self,
        source_label: int,
        dest_label: int,
        prefer_source_run: bool = False,
    ) -> ShortestRoute:
        """Return the shortest distance and one shortest route between two vertices.

        A cached run rooted at the destination is used first, then one rooted
        at the source. Failing both, a run is computed from the source when
        ``prefer_source_run`` is True, otherwise from the destination. Callers
        issuing many queries around a hub vertex can pass the flag so that
        every run originates from the hub.

        Raises ``UnknownVertexError`` for an unknown label and ``NoRouteError``
        when the destination cannot be reached.
        """

        source = self._labels.to_internal(source_label)
        dest = self._labels.to_internal(dest_label)

        distance, route = self._internal_shortest_distance(source, dest, prefer_source_run)
        if route is None:
            raise NoRouteError(
                f"No route from vertex {source_label} to vertex {dest_label}.",
                context={"source": source_label, "dest": dest_label},
            )
        return ShortestRoute(distance, self._labels.to_external_many(route))

    def distance(
        self,
        source_label: int,
        dest_label: int,
        prefer_source_run: bool = False,
    ) -> Optional[float]:
        """Shortest distance between two vertices, or None if unreachable."""

        source = self._labels.to_internal(source_label)
        dest = self._labels.to_internal(dest_label)
        distance, _ = self._internal_shortest_distance(source, dest, prefer_source_run)
        return distance

    def _select_run(
        self, source: int, dest: int, prefer_source_run: bool
    ) -> Tuple[ShortestPathRun, bool]:
        """Pick the run to answer ``source -> dest``; flag is True if rooted at dest."""

        run = self._inbound.lookup(dest)
        if run is not None:
            return run, True
        run = self._outbound.lookup(source)
        if run is not None:
            return run, False
        if prefer_source_run:
            return self._outbound.run_from(source), False
        return self._inbound.run_from(dest), True

    def _internal_shortest_distance(
        self, source: int, dest: int, prefer_source_run: bool
    ) -> Tuple[Optional[float], Optional[List[int]]]:
        if source == dest:
            return 0.0, [source]

        run, rooted_at_dest = self._select_run(source, dest, prefer_source_run)
        if rooted_at_dest:
            route = unwind_predecessors(run.predecessor, source, dest)
            distance = run.distance_to(source)
        else:
            reverse_route = unwind_predecessors(run.predecessor, dest, source)
            route = None if reverse_route is None else reverse_route[::-1]
            distance = run.distance_to(dest)

        if (route is None) != (distance is None):
            raise InternalInvariantError(
                "Shortest path run disagrees with its own predecessor tree.",
                context={"root": run.source, "source": source, "dest": dest},
            )
        return distance, route


__all__ = ["Graph", "ShortestRoute"]
