from .announcer import Announcer, LoggingAnnouncer
from .engine import Route, SessionState, Transition, WayfindingEngine
from .runner import NavigationSession

__all__ = [
    "Announcer",
    "LoggingAnnouncer",
    "Route",
    "SessionState",
    "Transition",
    "WayfindingEngine",
    "NavigationSession",
]
