from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from websockets.asyncio.server import Server, ServerConnection, serve

from .channel import EventChannel
from .session import ClientSession

if TYPE_CHECKING:
    from wayfinder.app.application import Application

logger = logging.getLogger(__name__)


class WebSocketServer:
    """Serves one navigation session per connected client.

    Sessions share the application's engine (graph, solver, resolver) and
    own nothing else in common: position, destination and narration are
    per client.
    """

    def __init__(self, application: "Application", host: str = "0.0.0.0", port: int = 8765) -> None:
        self.application = application
        self.host = host
        self.port = port
        self._server: Optional[Server] = None

    async def serve_forever(self) -> None:
        async with serve(self._handle_client, self.host, self.port) as server:
            self._server = server
            logger.info("Wayfinder listening on ws://%s:%s", self.host, self.port)
            try:
                await server.serve_forever()
            finally:
                self._server = None
        logger.info("Wayfinder no longer listening")

    def stop(self) -> None:
        if self._server is not None:
            self._server.close()

    async def _handle_client(self, connection: ServerConnection) -> None:
        channel = EventChannel(connection)
        await ClientSession(channel, self.application.create_session(channel)).run()
