from __future__ import annotations

import json
from pathlib import Path

import pytest

from wayfinder.app.application import Application
from wayfinder.app.config import (
    AppConfig,
    NarrationConfig,
    ResolverConfig,
    RoutingConfig,
    SessionConfig,
    WebSocketConfig,
)
from wayfinder.features.routing import InvalidDataset


def _make_config(map_path: Path) -> AppConfig:
    return AppConfig(
        map_path=map_path,
        websocket=WebSocketConfig(),
        narration=NarrationConfig(step_interval_s=0.0),
        resolver=ResolverConfig(),
        routing=RoutingConfig(),
        session=SessionConfig(),
    )


def _write_map(path: Path, *extra_nodes: str) -> Path:
    nodes = {"Lobby": {"x": 0, "y": 0}, "Cafe": {"x": 5, "y": 0}}
    edges = [["Lobby", "Cafe"]]
    for offset, node_id in enumerate(extra_nodes, start=1):
        nodes[node_id] = {"x": 5, "y": 5 * offset}
        edges.append(["Cafe", node_id])
    path.write_text(json.dumps({"nodes": nodes, "edges": edges}), encoding="utf-8")
    return path


def test_engine_requires_startup(tmp_path: Path) -> None:
    application = Application(config=_make_config(_write_map(tmp_path / "map.json")))

    with pytest.raises(RuntimeError):
        application.engine


def test_startup_and_reload(tmp_path: Path) -> None:
    map_path = _write_map(tmp_path / "map.json")
    application = Application(config=_make_config(map_path))
    application.startup()

    assert "Library" not in application.engine.location_graph

    _write_map(map_path, "Library")
    application.reload()

    assert "Library" in application.engine.location_graph
    assert application.engine.solver.shortest_path("Lobby", "Library") == ["Lobby", "Cafe", "Library"]


def test_invalid_map_fails_startup(tmp_path: Path) -> None:
    broken = tmp_path / "map.json"
    broken.write_text(json.dumps({"nodes": {"Lobby": {"x": 0, "y": 0}}, "edges": [["Lobby", "Ghost"]]}), encoding="utf-8")
    application = Application(config=_make_config(broken))

    with pytest.raises(InvalidDataset):
        application.startup()
