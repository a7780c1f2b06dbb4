from __future__ import annotations

import logging
from typing import AsyncIterator, Protocol

from wayfinder.session import Announcer, NavigationSession

from .schemas import MessageError, parse_message

logger = logging.getLogger(__name__)


class FrameSource(Announcer, Protocol):
    peer: str

    def frames(self) -> AsyncIterator[str | bytes]:
        ...


class ClientSession:
    """Single WebSocket client: inbound frames become engine events."""

    def __init__(self, channel: FrameSource, session: NavigationSession) -> None:
        self.channel = channel
        self.session = session

    async def run(self) -> None:
        logger.info("Client connected: %s", self.channel.peer)
        try:
            await self._incoming_loop()
        except Exception:
            logger.exception("Client session %s failed", self.channel.peer)
        finally:
            await self.session.close()
            logger.info("Client disconnected: %s", self.channel.peer)

    async def _incoming_loop(self) -> None:
        async for raw in self.channel.frames():
            try:
                event = parse_message(raw)
            except MessageError as exc:
                logger.warning("Ignoring message from %s: %s", self.channel.peer, exc)
                continue
            await self.session.dispatch(event)
