"""Dijkstra shortest path trees over a dense adjacency matrix, memoized per source."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
from numba import njit

from ..errors import InternalInvariantError, InvalidSourceError

logger = logging.getLogger(__name__)

NO_PREDECESSOR = -1


@njit
def dijkstra_single_source(
    weights: np.ndarray,
    adjacency: np.ndarray,
    source: int,
) -> tuple:
    """Compute distances and a predecessor tree from ``source`` in O(n^2).

    Unreachable vertices keep distance ``inf`` and predecessor -1. The linear
    scan settles the lowest index among equal tentative distances.
    """

    n_nodes = weights.shape[0]
    dist = np.full(n_nodes, np.inf)
    prev = np.full(n_nodes, -1, dtype=np.int64)
    settled = np.zeros(n_nodes, dtype=np.bool_)

    for v in range(n_nodes):
        if adjacency[source, v]:
            dist[v] = weights[source, v]
            prev[v] = source
    dist[source] = 0.0
    prev[source] = source
    settled[source] = True

    for _ in range(n_nodes - 1):
        u = -1
        min_val = np.inf
        for i in range(n_nodes):
            if (not settled[i]) and (dist[i] < min_val):
                min_val = dist[i]
                u = i

        if u == -1:
            break

        settled[u] = True
        for v in range(n_nodes):
            if settled[v] or not adjacency[u, v]:
                continue
            alt = dist[u] + weights[u, v]
            if alt < dist[v]:
                dist[v] = alt
                prev[v] = u

    return dist, prev


@dataclass(frozen=True)
class ShortestPathRun:
    """Output of one Dijkstra run, rooted at ``source``."""

    source: int
    distance: np.ndarray
    predecessor: np.ndarray

    def reachable(self, vertex: int) -> bool:
        return bool(np.isfinite(self.distance[vertex]))

    def distance_to(self, vertex: int) -> Optional[float]:
        if not self.reachable(vertex):
            return None
        return float(self.distance[vertex])


class ShortestPathEngine:
    """Runs Dijkstra over a fixed matrix and caches one run per source.

    The matrix never changes, so a cached run stays valid for the lifetime of
    the engine. ``run`` holds a lock across the cache check and the insert.
    """

    def __init__(self, weights: np.ndarray, adjacency: np.ndarray) -> None:
        if weights.shape != adjacency.shape or weights.ndim != 2 or weights.shape[0] != weights.shape[1]:
            raise InternalInvariantError(
                "Engine requires square weight and adjacency matrices of equal shape.",
                context={"weights": weights.shape, "adjacency": adjacency.shape},
            )
        self._weights = weights
        self._adjacency = adjacency
        self._runs: List[ShortestPathRun] = []
        self._run_index: Dict[int, int] = {}
        self._lock = threading.Lock()

    @property
    def order(self) -> int:
        return int(self._weights.shape[0])

    @property
    def run_count(self) -> int:
        """Number of Dijkstra computations performed so far."""
        return len(self._runs)

    @property
    def cached_sources(self) -> Tuple[int, ...]:
        return tuple(run.source for run in self._runs)

    def __len__(self) -> int:
        return len(self._runs)

    def has_run(self, source: int) -> bool:
        return source in self._run_index

    def _check_source(self, source: int) -> None:
        if not 0 <= source < self.order:
            raise InvalidSourceError(
                f"Start vertex {source} is out of range 0..{self.order - 1}.",
                context={"source": source, "order": self.order},
            )

    def run(self, source: int) -> int:
        """Return the cache index of the run from ``source``, computing it once."""

        self._check_source(source)
        with self._lock:
            index = self._run_index.get(source)
            if index is not None:
                return index

            distance, predecessor = dijkstra_single_source(
                self._weights, self._adjacency, source
            )
            distance.setflags(write=False)
            predecessor.setflags(write=False)
            self._runs.append(
                ShortestPathRun(source=source, distance=distance, predecessor=predecessor)
            )
            index = len(self._runs) - 1
            self._run_index[source] = index

        logger.debug("Computed shortest path tree from vertex %d (run %d).", source, index)
        return index

    def get(self, index: int) -> ShortestPathRun:
        try:
            return self._runs[index]
        except IndexError:
            raise InternalInvariantError(
                f"No shortest path run stored at index {index}.",
                context={"index": index, "runs": len(self._runs)},
            ) from None

    def lookup(self, source: int) -> Optional[ShortestPathRun]:
        """Return the cached run from ``source`` without computing one."""

        index = self._run_index.get(source)
        if index is None:
            return None
        return self._runs[index]

    def run_from(self, source: int) -> ShortestPathRun:
        return self.get(self.run(source))

    def precompute(self, sources: Iterable[int]) -> None:
        for source in sources:
            self.run(int(source))


__all__ = [
    "NO_PREDECESSOR",
    "dijkstra_single_source",
    "ShortestPathRun",
    "ShortestPathEngine",
]
