from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wayfinder.app.events import Destination, InboundEvent, LocationFix, Utterance


class MessageError(ValueError):
    """Inbound frame that cannot be turned into an event."""


class LocationFixMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    node_id: str = Field(..., alias="id", description="Scanned marker id")
    timestamp: Optional[float] = None


class TextMessage(BaseModel):
    text: str = Field(..., description="Spoken or typed destination phrase")
    timestamp: Optional[float] = None


def parse_message(raw: str | bytes) -> InboundEvent:
    try:
        payload: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MessageError(f"Malformed JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MessageError("Message must be a JSON object")

    msg_type = payload.get("type")
    try:
        if msg_type == "location_fix":
            fix = LocationFixMessage.model_validate(payload)
            if fix.timestamp is None:
                return LocationFix(node_id=fix.node_id)
            return LocationFix(node_id=fix.node_id, timestamp=fix.timestamp)
        if msg_type in ("utterance", "destination"):
            message = TextMessage.model_validate(payload)
            event_cls = Utterance if msg_type == "utterance" else Destination
            if message.timestamp is None:
                return event_cls(text=message.text)
            return event_cls(text=message.text, timestamp=message.timestamp)
    except ValidationError as exc:
        raise MessageError(f"Invalid {msg_type} message: {exc}") from exc
    raise MessageError(f"Unsupported message type: {msg_type!r}")
