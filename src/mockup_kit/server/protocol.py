"""Wire protocol of the sync channel.

Inbound frames are JSON objects ``{"type": ..., "payload": ...}`` and are
validated into one of three message models. Anything else is rejected with
``ProtocolError``.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .state import MockupRef

SYNC_PATH = "/websocket"


class PingMessage(BaseModel):
    type: Literal["PING"]
    payload: Any = None


class UpdateStatePayload(BaseModel):
    path: Optional[str] = None
    mockups: List[MockupRef]


class UpdateStateMessage(BaseModel):
    type: Literal["UPDATE_STATE"]
    payload: UpdateStatePayload


class NavigateMessage(BaseModel):
    type: Literal["NAVIGATE"]
    payload: Optional[str]


InboundMessage = Annotated[
    Union[PingMessage, UpdateStateMessage, NavigateMessage],
    Field(discriminator="type"),
]

_INBOUND = TypeAdapter(InboundMessage)


class ProtocolError(Exception):
    """Raised for frames that are not a valid inbound message."""


def parse_message(raw: str) -> PingMessage | UpdateStateMessage | NavigateMessage:
    try:
        return _INBOUND.validate_json(raw)
    except ValidationError as exc:
        raise ProtocolError(f"Rejected frame: {exc.error_count()} error(s): {exc.errors()[0]['msg']}") from exc


def encode(message_type: str, payload: Any) -> str:
    return json.dumps({"type": message_type, "payload": payload})


__all__ = [
    "InboundMessage",
    "NavigateMessage",
    "PingMessage",
    "ProtocolError",
    "SYNC_PATH",
    "UpdateStateMessage",
    "UpdateStatePayload",
    "encode",
    "parse_message",
]
