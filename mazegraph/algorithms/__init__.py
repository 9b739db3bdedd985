"""Shortest path algorithms over the dense internal index space."""

from .dijkstra import (
    NO_PREDECESSOR,
    ShortestPathEngine,
    ShortestPathRun,
    dijkstra_single_source,
)
from .path_cost import compute_route_cost, unwind_predecessors

__all__ = [
    "NO_PREDECESSOR",
    "ShortestPathEngine",
    "ShortestPathRun",
    "dijkstra_single_source",
    "compute_route_cost",
    "unwind_predecessors",
]
