import asyncio
import logging

from wayfinder.app.application import Application
from wayfinder.app.config import load_config
from wayfinder.websocket import WebSocketServer

logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(message)s")
logger = logging.getLogger(__name__)


async def main_async() -> None:
    config = load_config()
    logging.getLogger().setLevel(config.log_level)

    application = Application(config=config)
    server = WebSocketServer(
        application=application,
        host=config.websocket.host,
        port=config.websocket.port,
    )

    logger.info("Loading map from %s", config.map_path)
    try:
        application.startup()
    except Exception:
        logger.exception("Failed to load map")
        application.shutdown()
        return

    try:
        await server.serve_forever()
    except asyncio.CancelledError:
        raise
    except Exception:
        logger.exception("Server error")
    finally:
        server.stop()
        application.shutdown()
        logger.info("Wayfinder stopped")


def main() -> None:
    try:
        asyncio.run(main_async())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")


if __name__ == "__main__":
    main()
