from . import settings as narration_settings
from .directions import Direction, classify_turn, heading_change
from .narrator import RouteNarrator
from .task import NarrationScheduler, NarrationTask

__all__ = [
    "Direction",
    "classify_turn",
    "heading_change",
    "RouteNarrator",
    "NarrationScheduler",
    "NarrationTask",
    "narration_settings",
]
