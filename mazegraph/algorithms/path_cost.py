"""Route reconstruction from predecessor trees and route cost."""

from typing import List, Optional

import numpy as np
from numba import njit

from ..errors import InternalInvariantError
from .dijkstra import NO_PREDECESSOR


def unwind_predecessors(predecessor: np.ndarray, start: int, root: int) -> Optional[List[int]]:
    """Follow predecessors from ``start`` back to the tree's ``root``.

    Returns the vertices visited, ``start`` first and ``root`` last, or None
    when ``start`` is not in the tree.
    """

    n_nodes = predecessor.shape[0]
    route = [start]
    current = start
    while current != root:
        parent = int(predecessor[current])
        if parent == NO_PREDECESSOR:
            return None
        if len(route) > n_nodes:
            raise InternalInvariantError(
                f"Predecessor tree rooted at {root} contains a cycle.",
                context={"root": root, "start": start},
            )
        route.append(parent)
        current = parent
    return route


@njit
def compute_route_cost(route: np.ndarray, weights: np.ndarray, adjacency: np.ndarray) -> float:
    """Sum edge weights along a route of internal indices."""

    total = 0.0
    for i in range(route.shape[0] - 1):
        u = route[i]
        v = route[i + 1]
        if u == v:
            continue
        if not adjacency[u, v]:
            return np.inf
        total += weights[u, v]

    return total


__all__ = ["unwind_predecessors", "compute_route_cost"]
