from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Optional, Protocol

logger = logging.getLogger(__name__)


class Announcer(Protocol):
    """Consumer of outbound events: speech, a screen, a socket."""

    def announce(self, event: Any) -> Optional[Awaitable[None]]:
        ...


@dataclass(slots=True)
class LoggingAnnouncer(Announcer):
    """Announcer used when no speech or display device is attached."""

    history: list[Any]

    def __init__(self) -> None:
        self.history = []

    def announce(self, event: Any) -> None:
        logger.info("Speak: %s", getattr(event, "text", event))
        self.history.append(event)
