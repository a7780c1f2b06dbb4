from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from wayfinder.features.narration import narration_settings
from wayfinder.features.resolver import MatchMode, resolver_settings
from wayfinder.features.routing import SolverStrategy

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_MAP_PATH = PACKAGE_DIR / "data" / "map-data.json"
ENV_PATH = PACKAGE_DIR.parent / ".env"

DEFAULT_MARKER_DEBOUNCE_S = 3.0


@dataclass(slots=True)
class WebSocketConfig:
    host: str = "0.0.0.0"
    port: int = 8765


@dataclass(slots=True)
class NarrationConfig:
    step_interval_s: float = narration_settings.STEP_INTERVAL_S
    turn_threshold_deg: float = narration_settings.TURN_THRESHOLD_DEG


@dataclass(slots=True)
class ResolverConfig:
    alias_match: MatchMode = MatchMode(resolver_settings.ALIAS_MATCH)


@dataclass(slots=True)
class RoutingConfig:
    solver: SolverStrategy = SolverStrategy.LINEAR


@dataclass(slots=True)
class SessionConfig:
    marker_debounce_s: float = DEFAULT_MARKER_DEBOUNCE_S


@dataclass(slots=True)
class AppConfig:
    map_path: Path
    websocket: WebSocketConfig
    narration: NarrationConfig
    resolver: ResolverConfig
    routing: RoutingConfig
    session: SessionConfig
    log_level: str = "INFO"


def _get_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return float(default)
    try:
        return float(value)
    except ValueError:
        return float(default)


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return int(default)
    try:
        return int(value)
    except ValueError:
        return int(default)


def load_config() -> AppConfig:
    """Load configuration from environment variables (and ``.env`` if present)."""
    if ENV_PATH.exists():
        load_dotenv(ENV_PATH)
    else:
        load_dotenv()

    map_path = Path(os.getenv("WAYFINDER_MAP_PATH", str(DEFAULT_MAP_PATH))).expanduser()
    ws_host = os.getenv("WAYFINDER_WS_HOST", "0.0.0.0")
    ws_port = _get_int_env("WAYFINDER_WS_PORT", 8765)

    step_interval_s = _get_float_env("WAYFINDER_STEP_INTERVAL_S", narration_settings.STEP_INTERVAL_S)
    turn_threshold_deg = _get_float_env("WAYFINDER_TURN_THRESHOLD_DEG", narration_settings.TURN_THRESHOLD_DEG)
    marker_debounce_s = _get_float_env("WAYFINDER_MARKER_DEBOUNCE_S", DEFAULT_MARKER_DEBOUNCE_S)

    alias_match = MatchMode(os.getenv("WAYFINDER_ALIAS_MATCH", resolver_settings.ALIAS_MATCH).strip().lower())
    solver = SolverStrategy(os.getenv("WAYFINDER_SOLVER", SolverStrategy.LINEAR.value).strip().lower())
    log_level = os.getenv("WAYFINDER_LOG_LEVEL", "INFO").strip().upper()

    return AppConfig(
        map_path=map_path,
        websocket=WebSocketConfig(host=ws_host, port=ws_port),
        narration=NarrationConfig(
            step_interval_s=max(0.0, step_interval_s),
            turn_threshold_deg=turn_threshold_deg,
        ),
        resolver=ResolverConfig(alias_match=alias_match),
        routing=RoutingConfig(solver=solver),
        session=SessionConfig(marker_debounce_s=max(0.0, marker_debounce_s)),
        log_level=log_level,
    )
