from __future__ import annotations

from typing import Optional


class WayfindingError(Exception):
    """Base class for recoverable wayfinding failures."""

    reason = "wayfinding_error"


class MissingCoordinate(WayfindingError):
    reason = "missing_coordinate"

    def __init__(self, edge: tuple[str, str], node_id: str) -> None:
        super().__init__(f"Edge {edge[0]} - {edge[1]} references undefined node {node_id!r}")
        self.edge = edge
        self.node_id = node_id


class NoPathFound(WayfindingError):
    reason = "no_path"

    def __init__(self, source: Optional[str], destination: str) -> None:
        super().__init__(f"No path connects {source} and {destination}")
        self.source = source
        self.destination = destination


class UnresolvedUtterance(WayfindingError):
    reason = "unresolved"

    def __init__(self, utterance: str) -> None:
        super().__init__(f"{utterance} is not recognized.")
        self.utterance = utterance


class AmbiguousPositionRequired(WayfindingError):
    """The phrase named a category, but nearest-instance lookup needs a position."""

    reason = "position_required"

    def __init__(self, utterance: str, category: str) -> None:
        super().__init__(f"Scan a location marker first to find the nearest {category}.")
        self.utterance = utterance
        self.category = category


class InvalidDataset(Exception):
    """Structurally invalid location dataset. Fatal at load time."""

    reason = "invalid_dataset"
