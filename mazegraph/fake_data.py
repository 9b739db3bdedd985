"""Synthetic maze graph generation utilities."""

from typing import Any, Dict, List, Optional

import networkx as nx
import numpy as np

from .matrix import ABSENT


def generate_maze_graph(
    rows: int = 5,
    cols: int = 5,
    removal_prob: float = 0.3,
    weight_low: int = 1,
    weight_high: int = 9,
    n_queries: int = 10,
    label_offset: int = 100,
    label_step: int = 10,
    lower_triangular: bool = False,
    seed: int = 42,
) -> Dict[str, Any]:
    """Generate a connected grid maze with integer corridor lengths.

    Every cell of a ``rows x cols`` grid is a vertex; corridors join
    neighbouring cells. Corridors outside a random spanning tree are removed
    with probability ``removal_prob``, so the maze stays connected. Vertex
    ``nid`` gets the label ``label_offset + nid * label_step``.
    """

    rng = np.random.default_rng(seed)

    # =============== 1. Grid graph with integer node ids ===============
    G_grid = nx.grid_2d_graph(rows, cols)

    mapping = {}
    reverse_mapping = {}
    node_id = 0
    for i in range(rows):
        for j in range(cols):
            mapping[(i, j)] = node_id
            reverse_mapping[node_id] = (i, j)
            node_id += 1
    n_nodes = node_id

    G = nx.Graph()
    G.add_nodes_from(range(n_nodes))
    for (u2, v2) in G_grid.edges():
        u = mapping[u2]
        v = mapping[v2]
        w = int(rng.integers(weight_low, weight_high + 1))
        G.add_edge(u, v, weight=float(w))

    # =============== 2. Knock down walls, keep a spanning tree ===============
    tree = nx.minimum_spanning_tree(G, weight="weight")
    to_remove = []
    for u, v in list(G.edges()):
        if tree.has_edge(u, v):
            continue
        if rng.random() < removal_prob:
            to_remove.append((u, v))
    G.remove_edges_from(to_remove)

    # =============== 3. Coordinates and labels ===============
    node_coords = np.zeros((n_nodes, 2))
    for nid in range(n_nodes):
        i, j = reverse_mapping[nid]
        node_coords[nid] = [j, -i]

    vertex_labels = [label_offset + nid * label_step for nid in range(n_nodes)]
    labelled = nx.relabel_nodes(G, dict(zip(range(n_nodes), vertex_labels)))

    # =============== 4. Distance matrix ===============
    distance_matrix: List[List[Optional[float]]] = []
    for i in range(n_nodes):
        width = i + 1 if lower_triangular else n_nodes
        row: List[Optional[float]] = []
        for j in range(width):
            if i != j and G.has_edge(i, j):
                row.append(G[i][j]["weight"])
            else:
                row.append(ABSENT)
        distance_matrix.append(row)

    # =============== 5. Query pairs ===============
    origins = rng.integers(0, n_nodes, size=n_queries)
    destinations = rng.integers(0, n_nodes, size=n_queries)
    query_pairs = [
        (vertex_labels[int(o)], vertex_labels[int(d)]) for o, d in zip(origins, destinations)
    ]

    return dict(
        graph=labelled,
        distance_matrix=distance_matrix,
        vertex_labels=vertex_labels,
        node_coords=node_coords,
        query_pairs=query_pairs,
        n_nodes=n_nodes,
        n_edges=G.number_of_edges(),
    )


__all__ = ["generate_maze_graph"]
