import threading

import networkx as nx
import numpy as np
import pytest

from mazegraph.algorithms import (
    NO_PREDECESSOR,
    ShortestPathEngine,
    compute_route_cost,
    dijkstra_single_source,
    unwind_predecessors,
)
from mazegraph.algorithms import dijkstra as dijkstra_module
from mazegraph.errors import InternalInvariantError, InvalidSourceError
from mazegraph.fake_data import generate_maze_graph
from mazegraph.matrix import ABSENT, validate_distance_matrix

_ = ABSENT


def _arrays(rows):
    matrix = validate_distance_matrix(rows)
    return matrix.weights, matrix.adjacency


def test_kernel_prefers_cheaper_indirect_route(room_matrix) -> None:
    weights, adjacency = _arrays(room_matrix)

    dist, prev = dijkstra_single_source(weights, adjacency, 0)

    np.testing.assert_allclose(dist, [0.0, 1.0, 3.0, 4.0])
    assert prev.tolist() == [0, 0, 1, 2]


def test_kernel_breaks_ties_by_lowest_index() -> None:
    weights, adjacency = _arrays(
        [
            [_, 1, 1, _],
            [1, _, _, 1],
            [1, _, _, 1],
            [_, 1, 1, _],
        ]
    )

    dist, prev = dijkstra_single_source(weights, adjacency, 0)

    assert dist[3] == 2.0
    assert prev[3] == 1


def test_kernel_marks_unreachable_vertices() -> None:
    weights, adjacency = _arrays([[_, 2, _], [2, _, _], [_, _, _]])

    dist, prev = dijkstra_single_source(weights, adjacency, 0)

    assert np.isinf(dist[2])
    assert prev[2] == NO_PREDECESSOR
    assert prev[0] == 0


def test_kernel_ignores_self_loop_weight() -> None:
    weights, adjacency = _arrays([[5, 1], [1, 5]])

    dist, prev = dijkstra_single_source(weights, adjacency, 1)

    assert dist.tolist() == [1.0, 0.0]
    assert prev.tolist() == [1, 1]


def test_kernel_matches_networkx_on_maze() -> None:
    data = generate_maze_graph(rows=6, cols=7, removal_prob=0.5, seed=7)
    weights, adjacency = _arrays(data["distance_matrix"])
    labels = data["vertex_labels"]

    for source in (0, 13, 41):
        dist, _prev = dijkstra_single_source(weights, adjacency, source)
        expected = nx.single_source_dijkstra_path_length(data["graph"], labels[source])
        for index, label in enumerate(labels):
            assert dist[index] == pytest.approx(expected[label])


def test_engine_caches_runs(room_matrix) -> None:
    engine = ShortestPathEngine(*_arrays(room_matrix))

    first = engine.run(2)
    second = engine.run(2)

    assert first == second == 0
    assert engine.run_count == 1
    assert engine.has_run(2)
    assert not engine.has_run(0)
    assert engine.lookup(0) is None
    assert engine.lookup(2).source == 2
    assert engine.cached_sources == (2,)


def test_engine_appends_new_sources(room_matrix) -> None:
    engine = ShortestPathEngine(*_arrays(room_matrix))

    assert engine.run(3) == 0
    assert engine.run(1) == 1
    assert engine.run(3) == 0
    assert len(engine) == 2
    assert engine.get(1).source == 1


def test_engine_does_not_call_kernel_for_cached_source(room_matrix, monkeypatch) -> None:
    calls = []
    original = dijkstra_module.dijkstra_single_source

    def counting(weights, adjacency, source):
        calls.append(source)
        return original(weights, adjacency, source)

    monkeypatch.setattr(dijkstra_module, "dijkstra_single_source", counting)
    engine = ShortestPathEngine(*_arrays(room_matrix))

    for _ in range(5):
        engine.run(1)

    assert calls == [1]


def test_runs_are_read_only(room_matrix) -> None:
    engine = ShortestPathEngine(*_arrays(room_matrix))
    run = engine.run_from(0)

    with pytest.raises(ValueError):
        run.distance[1] = 0.0
    assert run.distance_to(3) == 4.0
    assert run.reachable(3)


@pytest.mark.parametrize("source", [-1, 4, 100])
def test_engine_rejects_out_of_range_source(room_matrix, source) -> None:
    engine = ShortestPathEngine(*_arrays(room_matrix))

    with pytest.raises(InvalidSourceError):
        engine.run(source)
    assert engine.run_count == 0


def test_engine_get_missing_run_is_internal_error(room_matrix) -> None:
    engine = ShortestPathEngine(*_arrays(room_matrix))

    with pytest.raises(InternalInvariantError):
        engine.get(0)


def test_engine_precompute(room_matrix) -> None:
    engine = ShortestPathEngine(*_arrays(room_matrix))

    engine.precompute(range(4))
    engine.precompute([0, 1])

    assert engine.run_count == 4


def test_engine_computes_each_source_once_across_threads(room_matrix, monkeypatch) -> None:
    calls = []
    original = dijkstra_module.dijkstra_single_source

    def counting(weights, adjacency, source):
        calls.append(source)
        return original(weights, adjacency, source)

    monkeypatch.setattr(dijkstra_module, "dijkstra_single_source", counting)
    engine = ShortestPathEngine(*_arrays(room_matrix))

    threads = [threading.Thread(target=engine.run, args=(2,)) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert calls == [2]


def test_unwind_predecessors(room_matrix) -> None:
    weights, adjacency = _arrays(room_matrix)
    _dist, prev = dijkstra_single_source(weights, adjacency, 0)

    assert unwind_predecessors(prev, 3, 0) == [3, 2, 1, 0]
    assert unwind_predecessors(prev, 0, 0) == [0]


def test_unwind_stops_at_missing_predecessor() -> None:
    prev = np.array([0, 0, -1], dtype=np.int64)

    assert unwind_predecessors(prev, 2, 0) is None


def test_unwind_detects_cycles() -> None:
    prev = np.array([0, 2, 1], dtype=np.int64)

    with pytest.raises(InternalInvariantError):
        unwind_predecessors(prev, 1, 0)


def test_compute_route_cost(room_matrix) -> None:
    weights, adjacency = _arrays(room_matrix)

    assert compute_route_cost(np.array([0, 1, 2, 3]), weights, adjacency) == 4.0
    assert compute_route_cost(np.array([2]), weights, adjacency) == 0.0
    assert np.isinf(compute_route_cost(np.array([0, 3]), weights, adjacency))
