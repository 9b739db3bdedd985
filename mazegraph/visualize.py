"""Plotly-based visualization of a graph and its shortest routes."""

from typing import Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from .graph import Graph


def _edge_segments(graph: Graph, node_coords: np.ndarray) -> tuple:
    edge_x, edge_y, mid_x, mid_y, edge_text = [], [], [], [], []
    labels = graph.labels
    for i, u_label in enumerate(labels):
        for v_label in graph.neighbours(u_label):
            j = labels.index(v_label)
            # Draw each undirected corridor once.
            if not graph.is_directed and j < i:
                continue
            x0, y0 = node_coords[i]
            x1, y1 = node_coords[j]
            edge_x += [x0, x1, None]
            edge_y += [y0, y1, None]
            mid_x.append((x0 + x1) / 2.0)
            mid_y.append((y0 + y1) / 2.0)
            edge_text.append(f"{graph.weight(u_label, v_label):g}")
    return edge_x, edge_y, mid_x, mid_y, edge_text


def visualize_graph_route_plotly(
    graph: Graph,
    node_coords: np.ndarray,
    route: Optional[Sequence[int]] = None,
    node_size: int = 14,
    title: str = "Shortest Route",
    return_fig: bool = True,
) -> Optional[go.Figure]:
    """Draw vertices, weighted edges and an optional route given in labels."""

    assert node_coords.shape[0] == graph.order, "node_coords must have one row per vertex"

    labels = graph.labels
    edge_x, edge_y, mid_x, mid_y, edge_text = _edge_segments(graph, node_coords)

    traces = [
        go.Scatter(
            x=edge_x,
            y=edge_y,
            mode="lines",
            line=dict(width=2, color="lightgray"),
            hoverinfo="none",
            showlegend=False,
        ),
        go.Scatter(
            x=mid_x,
            y=mid_y,
            mode="text",
            text=edge_text,
            textposition="top center",
            textfont=dict(size=10, color="black"),
            hoverinfo="text",
            showlegend=False,
            name="weights",
        ),
        go.Scatter(
            x=node_coords[:, 0],
            y=node_coords[:, 1],
            mode="markers+text",
            marker=dict(size=node_size, color="lightgray", line=dict(width=0.5, color="black")),
            text=[str(label) for label in labels],
            textposition="bottom center",
            hoverinfo="text",
            name="vertices",
        ),
    ]

    if route:
        route_idx = np.array([labels.index(label) for label in route], dtype=np.int64)
        cost = graph.route_cost(route)
        group_name = f"route {route[0]} → {route[-1]}"
        traces.append(
            go.Scatter(
                x=node_coords[route_idx, 0],
                y=node_coords[route_idx, 1],
                mode="lines+markers",
                line=dict(width=4, color="crimson"),
                marker=dict(size=node_size * 1.2, color="crimson"),
                name=group_name if cost is None else f"{group_name} ({cost:g})",
                hoverinfo="text",
                hovertext=[f"{group_name} vertex {label}" for label in route],
            )
        )

    fig = go.Figure(data=traces)
    fig.update_layout(
        title=title,
        showlegend=True,
        xaxis=dict(showgrid=False, zeroline=False, visible=False),
        yaxis=dict(showgrid=False, zeroline=False, visible=False, scaleanchor="x"),
        plot_bgcolor="white",
    )

    if return_fig:
        return fig
    fig.show()
    return None


__all__ = ["visualize_graph_route_plotly"]
