"""Bookkeeping for connected sync clients."""

from __future__ import annotations

import itertools
from typing import Dict, Iterator, List, Protocol


class Connection(Protocol):
    """Anything that can deliver a text frame, e.g. a FastAPI ``WebSocket``."""

    async def send_text(self, data: str) -> None: ...


class Client:
    """Handle for one connection. Carries no role; identity only."""

    _ids = itertools.count(1)

    def __init__(self, connection: Connection) -> None:
        self.id = next(self._ids)
        self.connection = connection

    async def send(self, frame: str) -> None:
        await self.connection.send_text(frame)

    def __repr__(self) -> str:
        return f"Client(id={self.id})"


class ClientRegistry:
    """Insertion-ordered set of connected clients."""

    def __init__(self) -> None:
        self._clients: Dict[int, Client] = {}

    def connect(self, connection: Connection) -> Client:
        client = Client(connection)
        self._clients[client.id] = client
        return client

    def disconnect(self, client: Client) -> None:
        self._clients.pop(client.id, None)

    def others(self, client: Client) -> List[Client]:
        return [other for other in self._clients.values() if other.id != client.id]

    def __contains__(self, client: object) -> bool:
        return isinstance(client, Client) and self._clients.get(client.id) is client

    def __iter__(self) -> Iterator[Client]:
        return iter(list(self._clients.values()))

    def __len__(self) -> int:
        return len(self._clients)


__all__ = ["Client", "ClientRegistry", "Connection"]
