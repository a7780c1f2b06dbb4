from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Dict, List, Sequence

import networkx as nx

logger = logging.getLogger(__name__)


class SolverStrategy(str, Enum):
    LINEAR = "linear"
    HEAP = "heap"


class ShortestPathSolver:
    """Single-source Dijkstra over a weighted ``networkx.Graph``.

    The default linear strategy picks the next node by scanning the unvisited
    set, so equal tentative distances resolve to the node that comes first in
    graph iteration order. The heap strategy hands the search to networkx and
    may break such ties differently.

    The solver only reads the graph and is safe to share between sessions.
    """

    def __init__(self, graph: nx.Graph, strategy: SolverStrategy = SolverStrategy.LINEAR) -> None:
        self.graph = graph
        self.strategy = SolverStrategy(strategy)

    def shortest_path(self, source: str, destination: str) -> List[str]:
        """Node ids from ``source`` to ``destination``, or an empty list when unreachable."""
        if source not in self.graph or destination not in self.graph:
            return []
        if self.strategy is SolverStrategy.HEAP:
            return self._heap_path(source, destination)
        return self._linear_path(source, destination)

    def _linear_path(self, source: str, destination: str) -> List[str]:
        distances: Dict[str, float] = {node: math.inf for node in self.graph}
        distances[source] = 0.0
        previous: Dict[str, str] = {}
        unvisited = dict.fromkeys(self.graph)

        while unvisited:
            current = min(unvisited, key=distances.__getitem__)
            del unvisited[current]
            if current == destination:
                break
            if math.isinf(distances[current]):
                # everything left is unreachable
                break
            for neighbor, attrs in self.graph.adj[current].items():
                candidate = distances[current] + attrs["weight"]
                if candidate < distances[neighbor]:
                    distances[neighbor] = candidate
                    previous[neighbor] = current

        if math.isinf(distances[destination]):
            return []
        path = [destination]
        while path[-1] != source:
            path.append(previous[path[-1]])
        path.reverse()
        return path

    def _heap_path(self, source: str, destination: str) -> List[str]:
        try:
            return list(nx.dijkstra_path(self.graph, source, destination, weight="weight"))
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return []

    def path_distance(self, path: Sequence[str]) -> float:
        """Sum of Euclidean segment lengths along ``path``."""
        if not path:
            return math.inf
        total = 0.0
        for source, target in zip(path, path[1:]):
            x1, y1 = self.graph.nodes[source]["pos"]
            x2, y2 = self.graph.nodes[target]["pos"]
            total += math.hypot(x2 - x1, y2 - y1)
        return total

    def distance(self, source: str, destination: str) -> float:
        if source == destination:
            return 0.0
        return self.path_distance(self.shortest_path(source, destination))
