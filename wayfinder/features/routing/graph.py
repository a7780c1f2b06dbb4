from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Tuple

import networkx as nx

from .errors import InvalidDataset, MissingCoordinate

logger = logging.getLogger(__name__)

Coordinate = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Node:
    id: str
    x: float
    y: float
    category: Optional[str] = None
    addressable: bool = True
    label: Optional[str] = None

    @property
    def position(self) -> Coordinate:
        return (self.x, self.y)

    @property
    def display_name(self) -> str:
        return self.label or self.id


class Edge(NamedTuple):
    a: str
    b: str


class LocationGraph:
    """Canonical store of locations, waypoints and the edges between them."""

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        self._nodes: Dict[str, Node] = {}
        for node in nodes:
            if node.id in self._nodes:
                raise InvalidDataset(f"Duplicate node id: {node.id}")
            self._nodes[node.id] = node
        self._edges: Tuple[Edge, ...] = tuple(Edge(*edge) for edge in edges)
        # only locations are category instances; a tagged waypoint is never a destination
        categories: Dict[str, List[str]] = {}
        for node in self._nodes.values():
            if node.category and node.addressable:
                categories.setdefault(node.category, []).append(node.id)
        self._categories = {tag: tuple(ids) for tag, ids in categories.items()}

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def node(self, node_id: str) -> Node:
        return self._nodes[node_id]

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def locations(self) -> List[Node]:
        return [node for node in self._nodes.values() if node.addressable]

    @property
    def waypoints(self) -> List[Node]:
        return [node for node in self._nodes.values() if not node.addressable]

    @property
    def coordinates(self) -> Dict[str, Coordinate]:
        return {node_id: node.position for node_id, node in self._nodes.items()}

    @property
    def categories(self) -> Dict[str, Tuple[str, ...]]:
        return dict(self._categories)

    def instances(self, category: str) -> Tuple[str, ...]:
        """Location ids tagged with ``category`` in declaration order."""
        return self._categories.get(category, ())


@dataclass(slots=True)
class BuildResult:
    graph: nx.Graph
    rejected: List[MissingCoordinate] = field(default_factory=list)


class GraphBuilder:
    """Turns an edge list and a coordinate lookup into a weighted undirected graph."""

    def build(self, edges: Iterable[Tuple[str, str]], coordinates: Mapping[str, Coordinate]) -> BuildResult:
        graph = nx.Graph()
        rejected: List[MissingCoordinate] = []
        for raw_edge in edges:
            edge = (str(raw_edge[0]), str(raw_edge[1]))
            try:
                source_pos, target_pos = self._resolve(edge, coordinates)
            except MissingCoordinate as exc:
                logger.warning("Skipping edge: %s", exc)
                rejected.append(exc)
                continue
            weight = math.hypot(source_pos[0] - target_pos[0], source_pos[1] - target_pos[1])
            for node_id, pos in ((edge[0], source_pos), (edge[1], target_pos)):
                if node_id not in graph:
                    graph.add_node(node_id, pos=pos)
            graph.add_edge(edge[0], edge[1], weight=weight)
        logger.info(
            "Graph built: %d nodes, %d edges, %d rejected",
            graph.number_of_nodes(),
            graph.number_of_edges(),
            len(rejected),
        )
        return BuildResult(graph=graph, rejected=rejected)

    @staticmethod
    def _resolve(edge: Tuple[str, str], coordinates: Mapping[str, Coordinate]) -> Tuple[Coordinate, Coordinate]:
        for node_id in edge:
            if node_id not in coordinates:
                raise MissingCoordinate(edge, node_id)
        return coordinates[edge[0]], coordinates[edge[1]]

    def build_for(self, location_graph: LocationGraph) -> BuildResult:
        return self.build(location_graph.edges, location_graph.coordinates)
