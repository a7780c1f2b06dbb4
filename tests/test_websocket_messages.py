from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pytest
from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK

from wayfinder.app.application import Application
from wayfinder.app.config import (
    AppConfig,
    NarrationConfig,
    ResolverConfig,
    RoutingConfig,
    SessionConfig,
    WebSocketConfig,
)
from wayfinder.app.events import Destination, LocationFix, PositionUpdated, Utterance
from wayfinder.dataset import parse_map_data
from wayfinder.websocket import ClientSession, EventChannel, MessageError, parse_message


class FakeSocket:
    """Stands in for a server connection: replays frames, records sends."""

    def __init__(
        self,
        messages: Iterable[str],
        remote_address: Optional[Tuple[str, int]] = ("127.0.0.1", 5000),
        drop: bool = False,
    ) -> None:
        self.remote_address = remote_address
        self._messages = list(messages)
        self._drop = drop
        self.closed = False
        self.sent: List[str] = []

    async def __aiter__(self):
        for raw in self._messages:
            yield raw
        if self._drop:
            raise ConnectionClosedError(None, None)

    async def send(self, payload: str) -> None:
        if self.closed:
            raise ConnectionClosedOK(None, None)
        self.sent.append(payload)


def _make_application() -> Application:
    config = AppConfig(
        map_path=Path("unused.json"),
        websocket=WebSocketConfig(),
        narration=NarrationConfig(step_interval_s=0.0),
        resolver=ResolverConfig(),
        routing=RoutingConfig(),
        session=SessionConfig(),
    )
    dataset = parse_map_data(
        {
            "nodes": {
                "Lobby": {"x": 0, "y": 0},
                "Cafe": {"x": 10, "y": 10, "label": "Olive Cafe"},
            },
            "turnPoints": {"T1": {"x": 10, "y": 0}},
            "edges": [["Lobby", "T1"], ["T1", "Cafe"]],
            "synonyms": {"Cafe": ["coffee", "olive"]},
        }
    )
    application = Application(config=config, dataset=dataset)
    application.startup()
    return application


def test_parse_location_fix() -> None:
    event = parse_message('{"type": "location_fix", "id": "Lobby", "timestamp": 12.5}')

    assert isinstance(event, LocationFix)
    assert event.node_id == "Lobby"
    assert event.timestamp == 12.5


def test_parse_text_messages() -> None:
    utterance = parse_message(json.dumps({"type": "utterance", "text": "take me to olive"}))
    destination = parse_message(json.dumps({"type": "destination", "text": "Cafe"}))

    assert isinstance(utterance, Utterance)
    assert utterance.text == "take me to olive"
    assert isinstance(destination, Destination)
    assert destination.timestamp > 0


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2]",
        '{"type": "ping"}',
        '{"type": "location_fix"}',
        '{"type": "utterance", "text": 5}',
    ],
)
def test_bad_messages_are_rejected(raw: str) -> None:
    with pytest.raises(MessageError):
        parse_message(raw)


def test_channel_names_peer_from_remote_address() -> None:
    assert EventChannel(FakeSocket([])).peer == "127.0.0.1:5000"
    assert EventChannel(FakeSocket([], remote_address=None)).peer == "unknown"


def test_channel_announces_events_as_single_json_frames() -> None:
    socket = FakeSocket([])
    channel = EventChannel(socket)

    asyncio.run(channel.announce(PositionUpdated("Lobby", "You are at Lobby")))

    assert len(socket.sent) == 1
    payload = json.loads(socket.sent[0])
    assert payload["type"] == "position_updated"
    assert payload["text"] == "You are at Lobby"


def test_channel_drops_events_after_client_left() -> None:
    socket = FakeSocket([])
    socket.closed = True

    asyncio.run(EventChannel(socket).announce(PositionUpdated("Lobby", "You are at Lobby")))

    assert socket.sent == []


def test_client_session_sends_events_as_json() -> None:
    application = _make_application()
    socket = FakeSocket(
        [
            '{"type": "location_fix", "id": "Lobby"}',
            "garbage",
            '{"type": "utterance", "text": "coffee"}',
        ]
    )

    async def scenario() -> None:
        channel = EventChannel(socket)
        await ClientSession(channel, application.create_session(channel)).run()

    asyncio.run(scenario())

    payloads = [json.loads(raw) for raw in socket.sent]
    types = [payload["type"] for payload in payloads]
    assert types[:3] == ["position_updated", "resolved_destination", "route_computed"]
    assert payloads[0]["text"] == "You are at Lobby"
    assert payloads[1]["node_id"] == "Cafe"
    assert payloads[2]["text"] == "Shortest path: Lobby → Olive Cafe"
    assert payloads[2]["path"] == ["Lobby", "T1", "Cafe"]


def test_dropped_client_ends_session_quietly() -> None:
    application = _make_application()
    socket = FakeSocket(['{"type": "location_fix", "id": "Lobby"}'], drop=True)

    async def scenario() -> None:
        channel = EventChannel(socket)
        await ClientSession(channel, application.create_session(channel)).run()

    asyncio.run(scenario())

    assert [json.loads(raw)["type"] for raw in socket.sent] == ["position_updated"]


def test_sessions_share_engine_but_not_state() -> None:
    application = _make_application()
    first = application.create_session(EventChannel(FakeSocket([])))
    second = application.create_session(EventChannel(FakeSocket([])))

    asyncio.run(first.dispatch(LocationFix("Lobby")))

    assert first.engine is second.engine
    assert first.state.position == "Lobby"
    assert second.state.position is None
