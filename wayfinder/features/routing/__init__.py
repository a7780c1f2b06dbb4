from .errors import (
    AmbiguousPositionRequired,
    InvalidDataset,
    MissingCoordinate,
    NoPathFound,
    UnresolvedUtterance,
    WayfindingError,
)
from .graph import BuildResult, Edge, GraphBuilder, LocationGraph, Node
from .solver import ShortestPathSolver, SolverStrategy

__all__ = [
    "AmbiguousPositionRequired",
    "InvalidDataset",
    "MissingCoordinate",
    "NoPathFound",
    "UnresolvedUtterance",
    "WayfindingError",
    "BuildResult",
    "Edge",
    "GraphBuilder",
    "LocationGraph",
    "Node",
    "ShortestPathSolver",
    "SolverStrategy",
]
