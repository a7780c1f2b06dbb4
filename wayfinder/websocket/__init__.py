from .channel import EventChannel
from .schemas import MessageError, parse_message
from .server import WebSocketServer
from .session import ClientSession, FrameSource

__all__ = [
    "EventChannel",
    "MessageError",
    "parse_message",
    "WebSocketServer",
    "ClientSession",
    "FrameSource",
]
