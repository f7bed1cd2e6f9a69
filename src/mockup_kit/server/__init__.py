"""Sync server relaying mockup state between an app and developer tools."""

from .app import SyncHub, create_app, run_server
from .protocol import SYNC_PATH, ProtocolError, parse_message
from .registry import Client, ClientRegistry
from .router import Delivery, MessageRouter
from .state import MockupRef, SessionState

__all__ = [
    "Client",
    "ClientRegistry",
    "Delivery",
    "MessageRouter",
    "MockupRef",
    "ProtocolError",
    "SYNC_PATH",
    "SessionState",
    "SyncHub",
    "create_app",
    "parse_message",
    "run_server",
]
