from __future__ import annotations

import itertools
import math

import networkx as nx
import pytest

from wayfinder.app.config import DEFAULT_MAP_PATH
from wayfinder.dataset import load_map_data
from wayfinder.features.routing import GraphBuilder, ShortestPathSolver, SolverStrategy


def _make_solver(coordinates, edges, strategy=SolverStrategy.LINEAR) -> ShortestPathSolver:
    graph = GraphBuilder().build(edges, coordinates).graph
    return ShortestPathSolver(graph, strategy)


def _colinear_solver() -> ShortestPathSolver:
    coordinates = {"A": (0.0, 0.0), "B": (1.0, 0.0), "C": (2.0, 0.0), "D": (3.0, 0.0)}
    return _make_solver(coordinates, [("A", "B"), ("B", "C"), ("C", "D")])


def test_colinear_path_and_distance() -> None:
    solver = _colinear_solver()

    path = solver.shortest_path("A", "D")

    assert path == ["A", "B", "C", "D"]
    assert solver.path_distance(path) == pytest.approx(3.0)
    assert solver.distance("A", "D") == pytest.approx(3.0)
    assert solver.shortest_path("D", "A") == ["D", "C", "B", "A"]


def test_unreachable_destination_returns_empty_path() -> None:
    coordinates = {"A": (0.0, 0.0), "B": (1.0, 0.0), "X": (5.0, 5.0), "Y": (6.0, 5.0)}
    solver = _make_solver(coordinates, [("A", "B"), ("X", "Y")])

    assert solver.shortest_path("A", "Y") == []
    assert math.isinf(solver.path_distance([]))
    assert math.isinf(solver.distance("A", "Y"))


def test_unknown_endpoint_returns_empty_path() -> None:
    solver = _colinear_solver()

    assert solver.shortest_path("A", "Nowhere") == []
    assert solver.shortest_path("Nowhere", "A") == []


def test_same_source_and_destination() -> None:
    solver = _colinear_solver()

    assert solver.shortest_path("B", "B") == ["B"]
    assert solver.distance("B", "B") == 0.0


def test_equal_length_paths_prefer_first_declared_node() -> None:
    coordinates = {"S": (0.0, 0.0), "A": (1.0, 0.0), "B": (0.0, 1.0), "D": (1.0, 1.0)}

    via_a_first = _make_solver(coordinates, [("S", "A"), ("S", "B"), ("A", "D"), ("B", "D")])
    via_b_first = _make_solver(coordinates, [("S", "B"), ("S", "A"), ("B", "D"), ("A", "D")])

    assert via_a_first.shortest_path("S", "D") == ["S", "A", "D"]
    assert via_b_first.shortest_path("S", "D") == ["S", "B", "D"]


def test_shorter_detour_beats_fewer_hops() -> None:
    coordinates = {"A": (0.0, 0.0), "B": (10.0, 0.0), "M": (5.0, 1.0), "F": (5.0, 20.0)}
    solver = _make_solver(coordinates, [("A", "F"), ("F", "B"), ("A", "M"), ("M", "B")])

    assert solver.shortest_path("A", "B") == ["A", "M", "B"]


def test_linear_and_heap_agree_with_networkx_on_packaged_map() -> None:
    dataset = load_map_data(DEFAULT_MAP_PATH)
    graph = GraphBuilder().build_for(dataset.graph).graph
    linear = ShortestPathSolver(graph, SolverStrategy.LINEAR)
    heap = ShortestPathSolver(graph, SolverStrategy.HEAP)

    locations = [node.id for node in dataset.graph.locations]
    for source, destination in itertools.combinations(locations, 2):
        expected = nx.dijkstra_path_length(graph, source, destination, weight="weight")
        assert linear.distance(source, destination) == pytest.approx(expected)
        assert heap.distance(source, destination) == pytest.approx(expected)
