from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from wayfinder.features.resolver import NormalizerConfig, SynonymTable
from wayfinder.features.routing import Edge, InvalidDataset, LocationGraph, Node

from .schemas import MapDataPayload

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MapDataset:
    graph: LocationGraph
    synonyms: Optional[SynonymTable] = None
    normalizer_config: Optional[NormalizerConfig] = None
    source: Optional[Path] = None


def parse_map_data(payload: Dict[str, Any], source: Optional[Path] = None) -> MapDataset:
    try:
        data = MapDataPayload.model_validate(payload)
    except ValidationError as exc:
        raise InvalidDataset(f"Map data failed validation: {exc}") from exc

    nodes = [
        Node(id=node_id, x=point.x, y=point.y, category=point.category, label=point.label)
        for node_id, point in data.nodes.items()
    ]
    nodes.extend(
        Node(id=node_id, x=point.x, y=point.y, category=point.category, addressable=False, label=point.label)
        for node_id, point in data.turn_points.items()
    )
    edges = [Edge(edge.source, edge.target) for edge in data.edges]

    known = set(data.nodes) | set(data.turn_points)
    if edges and not any(edge.a in known and edge.b in known for edge in edges):
        raise InvalidDataset("No edge connects two defined nodes")

    synonyms = SynonymTable.from_mapping(data.synonyms) if data.synonyms is not None else None
    normalizer_config = None
    if data.filler_phrases is not None or data.homophones is not None:
        defaults = NormalizerConfig()
        normalizer_config = NormalizerConfig(
            filler_phrases=tuple(data.filler_phrases) if data.filler_phrases is not None else defaults.filler_phrases,
            homophones=dict(data.homophones) if data.homophones is not None else defaults.homophones,
        )

    return MapDataset(
        graph=LocationGraph(nodes, edges),
        synonyms=synonyms,
        normalizer_config=normalizer_config,
        source=source,
    )


def load_map_data(path: Path) -> MapDataset:
    """Read and validate a map dataset. Any structural problem is fatal."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error("Failed to load map %s: %s", path, exc)
        raise InvalidDataset(f"Cannot read map data from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise InvalidDataset(f"Map data in {path} must be a JSON object")

    try:
        dataset = parse_map_data(payload, source=path)
    except InvalidDataset as exc:
        logger.error("Failed to load map %s: %s", path, exc)
        raise
    logger.info(
        "Map loaded: %d locations, %d turn points, %d edges (%s)",
        len(dataset.graph.locations),
        len(dataset.graph.waypoints),
        len(dataset.graph.edges),
        path,
    )
    return dataset
