from __future__ import annotations

from pathlib import Path

import pytest

from wayfinder.app import config as config_module
from wayfinder.app.config import DEFAULT_MAP_PATH, load_config
from wayfinder.features.resolver import MatchMode
from wayfinder.features.routing import SolverStrategy

_ENV_NAMES = (
    "WAYFINDER_MAP_PATH",
    "WAYFINDER_WS_HOST",
    "WAYFINDER_WS_PORT",
    "WAYFINDER_STEP_INTERVAL_S",
    "WAYFINDER_TURN_THRESHOLD_DEG",
    "WAYFINDER_MARKER_DEBOUNCE_S",
    "WAYFINDER_ALIAS_MATCH",
    "WAYFINDER_SOLVER",
    "WAYFINDER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = load_config()

    assert config.map_path == DEFAULT_MAP_PATH
    assert config.websocket.host == "0.0.0.0"
    assert config.websocket.port == 8765
    assert config.narration.step_interval_s == pytest.approx(4.0)
    assert config.narration.turn_threshold_deg == pytest.approx(45.0)
    assert config.session.marker_debounce_s == pytest.approx(3.0)
    assert config.resolver.alias_match is MatchMode.TOKEN
    assert config.routing.solver is SolverStrategy.LINEAR
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WAYFINDER_MAP_PATH", str(tmp_path / "campus.json"))
    monkeypatch.setenv("WAYFINDER_WS_PORT", "9001")
    monkeypatch.setenv("WAYFINDER_STEP_INTERVAL_S", "1.5")
    monkeypatch.setenv("WAYFINDER_ALIAS_MATCH", "Substring")
    monkeypatch.setenv("WAYFINDER_SOLVER", "heap")
    monkeypatch.setenv("WAYFINDER_LOG_LEVEL", "debug")

    config = load_config()

    assert config.map_path == tmp_path / "campus.json"
    assert config.websocket.port == 9001
    assert config.narration.step_interval_s == pytest.approx(1.5)
    assert config.resolver.alias_match is MatchMode.SUBSTRING
    assert config.routing.solver is SolverStrategy.HEAP
    assert config.log_level == "DEBUG"


def test_bad_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAYFINDER_WS_PORT", "eighty")
    monkeypatch.setenv("WAYFINDER_MARKER_DEBOUNCE_S", "soon")

    config = load_config()

    assert config.websocket.port == 8765
    assert config.session.marker_debounce_s == pytest.approx(3.0)


def test_unknown_solver_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAYFINDER_SOLVER", "astar")

    with pytest.raises(ValueError):
        load_config()
