"""Demo: build a synthetic maze graph and answer a batch of shortest-route queries."""

import logging
import os
from typing import Optional

from .errors import MazeGraphError
from .fake_data import generate_maze_graph
from .graph import Graph
from .logging_utils import configure_logging, log_exception
from .visualize import visualize_graph_route_plotly


def main(output_path: Optional[str] = None, seed: int = 42) -> Graph:
    logger = configure_logging(logging.INFO)

    # ============================================================
    # 1. Generate a maze
    # ============================================================
    print("=== Generating Maze ===")
    data = generate_maze_graph(rows=6, cols=6, removal_prob=0.4, n_queries=12, seed=seed)
    print(f"  {data['n_nodes']} vertices, {data['n_edges']} corridors")

    # ============================================================
    # 2. Build the graph
    # ============================================================
    try:
        graph = Graph(data["distance_matrix"], data["vertex_labels"])
    except MazeGraphError as exc:
        log_exception(logger, exc)
        raise

    # ============================================================
    # 3. Queries, all runs rooted at the first query's source
    # ============================================================
    print("\n=== Shortest Routes ===")
    hub = data["query_pairs"][0][0]
    longest = None
    for _, dest in data["query_pairs"]:
        try:
            distance, route = graph.shortest_distance(hub, dest, prefer_source_run=True)
        except MazeGraphError as exc:
            log_exception(logger, exc)
            continue
        print(f"  {hub} -> {dest}: {distance:g} via {route}")
        if longest is None or distance > longest.distance:
            longest = graph.shortest_distance(hub, dest, prefer_source_run=True)

    print(f"\n  Dijkstra runs computed: {graph.run_count}")

    # ============================================================
    # 4. Export the longest route
    # ============================================================
    if output_path is None:
        output_path = os.path.join(os.path.dirname(__file__), "..", "route.html")
    output_path = os.path.abspath(output_path)

    fig = visualize_graph_route_plotly(
        graph,
        data["node_coords"],
        route=None if longest is None else longest.route,
        title="Maze: longest hub route",
    )
    fig.write_html(output_path)
    print(f"  Wrote {output_path}")
    return graph


if __name__ == "__main__":
    main()
