from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union


def _timestamp() -> float:
    return time.time()


# Inbound events


@dataclass(slots=True)
class LocationFix:
    node_id: str
    timestamp: float = field(default_factory=_timestamp)


@dataclass(slots=True)
class Utterance:
    text: str
    timestamp: float = field(default_factory=_timestamp)


@dataclass(slots=True)
class Destination:
    """Destination typed in by hand; resolved like speech."""

    text: str
    timestamp: float = field(default_factory=_timestamp)


InboundEvent = Union[LocationFix, Utterance, Destination]


# Outbound events. Every one carries ``text`` for speech or display.


@dataclass(slots=True)
class PositionUpdated:
    node_id: str
    text: str
    type: Literal["position_updated"] = "position_updated"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class UnknownLocation:
    marker: str
    text: str
    type: Literal["unknown_location"] = "unknown_location"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ResolvedDestination:
    node_id: str
    text: str
    source: str = "direct"
    category: Optional[str] = None
    type: Literal["resolved_destination"] = "resolved_destination"

    def as_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        if self.category is None:
            payload.pop("category", None)
        return payload


@dataclass(slots=True)
class ResolutionFailed:
    reason: str
    utterance: str
    text: str
    type: Literal["resolution_failed"] = "resolution_failed"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class RouteComputed:
    route_id: str
    path: List[str]
    distance: float
    text: str
    type: Literal["route_computed"] = "route_computed"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class RouteUnavailable:
    origin: str
    destination: str
    text: str = "No path found"
    type: Literal["route_unavailable"] = "route_unavailable"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class NarrationStep:
    route_id: str
    index: int
    target_id: str
    direction: str
    text: str
    type: Literal["narration_step"] = "narration_step"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ArrivalAnnounced:
    route_id: Optional[str]
    node_id: str
    text: str
    type: Literal["arrival"] = "arrival"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


OutboundEvent = Union[
    PositionUpdated,
    UnknownLocation,
    ResolvedDestination,
    ResolutionFailed,
    RouteComputed,
    RouteUnavailable,
    NarrationStep,
    ArrivalAnnounced,
]
