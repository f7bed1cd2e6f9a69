"""Message handling for the sync channel."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Sequence

from loguru import logger

from .protocol import NavigateMessage, PingMessage, ProtocolError, UpdateStateMessage, encode, parse_message
from .registry import Client, ClientRegistry
from .state import SessionState


@dataclass(slots=True, frozen=True)
class Delivery:
    """A frame and the clients it goes to."""

    recipients: Sequence[Client]
    frame: str


class MessageRouter:
    """Apply inbound messages to the session and decide who hears about it.

    ``route`` mutates state without awaiting anything, so each message is
    applied completely before the next one. ``deliver`` then fans the frames
    out, one independent send per recipient.
    """

    def __init__(self, state: SessionState, registry: ClientRegistry) -> None:
        self.state = state
        self.registry = registry

    def route(self, sender: Client, raw: str) -> List[Delivery]:
        try:
            message = parse_message(raw)
        except ProtocolError as exc:
            logger.warning("Discarding message from {}: {}", sender, exc)
            return []

        if isinstance(message, PingMessage):
            if not self.state.has_synced:
                logger.debug("PING from {} before any app synced", sender)
                return []
            return [Delivery((sender,), self._sync_frame())]

        if isinstance(message, UpdateStateMessage):
            self.state.apply_update(message.payload.path, message.payload.mockups)
            logger.debug("State updated by {}: path={}", sender, self.state.path)
            return [Delivery(self.registry.others(sender), self._sync_frame())]

        if isinstance(message, NavigateMessage):
            self.state.navigate(message.payload)
            logger.debug("{} navigated to {}", sender, self.state.path)
            return [Delivery(self.registry.others(sender), encode("NAVIGATE", self.state.path))]

        return []

    async def deliver(self, deliveries: Sequence[Delivery]) -> None:
        for delivery in deliveries:
            if not delivery.recipients:
                continue
            results = await asyncio.gather(
                *(client.send(delivery.frame) for client in delivery.recipients),
                return_exceptions=True,
            )
            for client, result in zip(delivery.recipients, results):
                if isinstance(result, Exception):
                    logger.warning("Failed to send to {}: {}", client, result)

    async def dispatch(self, sender: Client, raw: str) -> None:
        await self.deliver(self.route(sender, raw))

    def _sync_frame(self) -> str:
        return encode("SYNC_STATE", self.state.snapshot())


__all__ = ["Delivery", "MessageRouter"]
