"""Supervisor for the Discord presence stream."""

import asyncio
from enum import Enum

import logfire

from presence.adapter.discord import DiscordConnector, PresenceGateway
from presence.application.background.base import BackgroundJob
from presence.domain.model import PresenceSnapshot
from presence.domain.repository import SourceCache, UserRepository


class StreamState(str, Enum):
    """Connection state of the presence stream."""

    CONNECTING = "connecting"
    STREAMING = "streaming"
    BACKOFF = "backoff"


class PresenceStreamSupervisor(BackgroundJob):
    """Keeps a Discord gateway connection alive and applies its events.

    State machine::

        CONNECTING --ready--> STREAMING
        CONNECTING/STREAMING --closed or failed--> BACKOFF
        BACKOFF --backoff elapsed--> CONNECTING

    Retries are unbounded; a failing connection is never fatal. Presence
    events are written to the cache one at a time as they arrive.
    """

    name = "discord"

    def __init__(
        self,
        connector: DiscordConnector,
        cache: SourceCache[int, PresenceSnapshot],
        user_repository: UserRepository,
        backoff: float,
    ) -> None:
        self.connector = connector
        self.cache = cache
        self.backoff = backoff
        self.watched_ids: frozenset[int] = frozenset(
            user.discord_id
            for user in user_repository.find_all()
            if user.discord_id is not None
        )
        self.state = StreamState.CONNECTING
        self.connections = 0

    def on_connected(self) -> None:
        """Gateway handshake completed."""
        self.state = StreamState.STREAMING
        logfire.info("Presence stream connected", connections=self.connections)

    def on_presence(self, discord_id: int, snapshot: PresenceSnapshot) -> None:
        """Store a presence update for a watched user."""
        if discord_id not in self.watched_ids:
            return
        self.cache.put(discord_id, snapshot)

    async def connect_once(self) -> None:
        """Run one connection until it ends, then enter BACKOFF."""
        self.state = StreamState.CONNECTING
        self.connections += 1
        gateway: PresenceGateway | None = None
        try:
            gateway = self.connector.open_gateway(self.watched_ids, self)
            await gateway.run()
            logfire.warn("Presence stream closed")
        except Exception:
            logfire.exception("Presence stream failed")
        finally:
            if gateway is not None:
                await self._close(gateway)
            self.state = StreamState.BACKOFF

    async def run_forever(self) -> None:
        """Connect, and reconnect after a fixed backoff, until cancelled."""
        logfire.info(
            "Started presence stream",
            watched=len(self.watched_ids),
            backoff=self.backoff,
        )
        while True:
            await self.connect_once()
            logfire.info("Reconnecting presence stream", delay=self.backoff)
            await asyncio.sleep(self.backoff)

    @staticmethod
    async def _close(gateway: PresenceGateway) -> None:
        try:
            await gateway.close()
        except Exception:
            logfire.exception("Failed to close presence stream")
