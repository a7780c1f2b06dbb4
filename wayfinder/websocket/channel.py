from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator

from websockets.asyncio.server import ServerConnection
from websockets.exceptions import ConnectionClosed, ConnectionClosedError

logger = logging.getLogger(__name__)


class EventChannel:
    """One client socket seen as a stream of JSON frames in and events out.

    The channel is also the session's announcer: every outbound event is
    serialized with ``as_dict()`` and sent as a single text frame.
    """

    def __init__(self, connection: ServerConnection) -> None:
        self._connection = connection
        peer = connection.remote_address
        self.peer = f"{peer[0]}:{peer[1]}" if peer else "unknown"

    async def frames(self) -> AsyncIterator[str | bytes]:
        try:
            async for raw in self._connection:
                yield raw
        except ConnectionClosedError as exc:
            logger.info("Client %s dropped: %s", self.peer, exc)

    async def announce(self, event: Any) -> None:
        payload = json.dumps(event.as_dict(), ensure_ascii=False)
        try:
            await self._connection.send(payload)
        except ConnectionClosed:
            logger.debug("Client %s gone, dropped %s", self.peer, event.type)
