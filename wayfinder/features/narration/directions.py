from __future__ import annotations

import math
from enum import Enum
from typing import Tuple

from . import settings

Point = Tuple[float, float]


class Direction(str, Enum):
    LEFT = "turn left"
    RIGHT = "turn right"
    STRAIGHT = "go straight"


def heading_change(previous: Point, current: Point, following: Point) -> float:
    """Signed angle in degrees from the incoming to the outgoing edge, in [-180, 180)."""
    incoming = math.atan2(current[1] - previous[1], current[0] - previous[0])
    outgoing = math.atan2(following[1] - current[1], following[0] - current[0])
    delta = math.degrees(outgoing - incoming)
    return (delta + 180.0) % 360.0 - 180.0


def classify_turn(
    previous: Point,
    current: Point,
    following: Point,
    threshold_deg: float = settings.TURN_THRESHOLD_DEG,
) -> Direction:
    delta = heading_change(previous, current, following)
    if delta > threshold_deg:
        return Direction.LEFT
    if delta < -threshold_deg:
        return Direction.RIGHT
    return Direction.STRAIGHT
