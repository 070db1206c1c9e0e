"""Discord gateway connection producing presence snapshots.

Each gateway object is one connection: it is run until the connection ends
and then discarded. Reconnecting is the supervisor's job.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Protocol

import discord
import logfire

from presence.domain.model import (
    ClientStatus,
    CustomEmoji,
    CustomStatus,
    Emoji,
    OfficialEmoji,
    PresenceSnapshot,
    UnknownEmoji,
)
from presence.domain.value import OnlineStatus

# Gateway limit on user ids per member request
MEMBER_QUERY_LIMIT = 100


class PresenceListener(Protocol):
    """Receiver of gateway events."""

    def on_connected(self) -> None:
        """The gateway finished its handshake and is streaming."""
        ...

    def on_presence(self, discord_id: int, snapshot: PresenceSnapshot) -> None:
        """A watched user's presence changed."""
        ...


class PresenceGateway(ABC):
    """A single streaming connection."""

    @abstractmethod
    async def run(self) -> None:
        """Connect and stream until the connection ends.

        Returns on a clean close and raises on a failure.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Tear the connection down. Safe to call more than once."""
        pass


class DiscordConnector(ABC):
    """Creates gateway connections."""

    @abstractmethod
    def open_gateway(
        self, watched_ids: frozenset[int], listener: PresenceListener
    ) -> PresenceGateway:
        """Create a new, not yet started, connection.

        Args:
            watched_ids: Discord ids whose presence should be reported
            listener: Receiver for connection and presence events
        """
        pass


def emoji_url(emoji_id: int, animated: bool) -> str:
    """CDN URL of a custom emoji."""
    extension = "gif" if animated else "webp"
    return f"https://cdn.discordapp.com/emojis/{emoji_id}.{extension}?size=160"


def to_online_status(status: Any) -> OnlineStatus:
    """Map a ``discord.Status`` (or its string value) to ``OnlineStatus``."""
    value = str(status)
    if value == "do_not_disturb":
        value = OnlineStatus.DO_NOT_DISTURB.value
    try:
        return OnlineStatus(value)
    except ValueError:
        logfire.warn("Unknown Discord status", status=value)
        return OnlineStatus.OFFLINE


def to_emoji(emoji: Any) -> Emoji:
    """Classify a partial emoji.

    Unicode emoji carry no id; custom emoji carry an id and an animated
    flag. Anything else is kept as unknown.
    """
    emoji_id = getattr(emoji, "id", None)
    animated = getattr(emoji, "animated", None)
    if emoji_id is None and not animated:
        return OfficialEmoji(name=emoji.name)
    if emoji_id is not None and animated is not None:
        return CustomEmoji(
            name=emoji.name,
            id=emoji_id,
            animated=animated,
            url=emoji_url(emoji_id, animated),
        )

    logfire.error("Unrecognized emoji shape", name=emoji.name, id=emoji_id)
    return UnknownEmoji(name=emoji.name, id=emoji_id, animated=animated)


def to_custom_status(activities: Iterable[Any]) -> Optional[CustomStatus]:
    """Extract the custom status from a member's activities, if set."""
    for activity in activities:
        if getattr(activity, "type", None) != discord.ActivityType.custom:
            continue
        emoji = getattr(activity, "emoji", None)
        return CustomStatus(
            emoji=to_emoji(emoji) if emoji is not None else None,
            text=activity.name,
        )
    return None


def _surface_status(status: Any) -> Optional[OnlineStatus]:
    online_status = to_online_status(status)
    return None if online_status == OnlineStatus.OFFLINE else online_status


def snapshot_from_member(member: Any) -> PresenceSnapshot:
    """Build a presence snapshot from a ``discord.Member``."""
    client_status = ClientStatus(
        desktop=_surface_status(member.desktop_status),
        mobile=_surface_status(member.mobile_status),
        web=_surface_status(member.web_status),
    )
    connected = any(
        surface is not None
        for surface in (client_status.desktop, client_status.mobile, client_status.web)
    )

    return PresenceSnapshot(
        display_name=member.display_name,
        status=to_online_status(member.status),
        client_status=client_status if connected else None,
        custom_status=to_custom_status(member.activities),
    )


class _PresenceClient(discord.Client):
    """discord.py client that forwards watched presences to a listener."""

    def __init__(
        self,
        guild_ids: list[int],
        watched_ids: frozenset[int],
        listener: PresenceListener,
    ) -> None:
        intents = discord.Intents.none()
        intents.guilds = True
        intents.members = True
        intents.presences = True
        super().__init__(intents=intents, chunk_guilds_at_startup=False)

        self._guild_ids = guild_ids
        self._watched_ids = watched_ids
        self._listener = listener

    async def on_ready(self) -> None:
        logfire.info("Discord gateway ready", bot=str(self.user))
        self._listener.on_connected()

        for guild_id in self._guild_ids:
            guild = self.get_guild(guild_id)
            if guild is None:
                logfire.warn("Configured guild is not visible to the bot", guild_id=guild_id)
                continue

            for member in await self.query_watched_members(guild):
                self._forward(member)

    async def query_watched_members(self, guild: Any) -> list[discord.Member]:
        """Request watched members of a guild together with their presences."""
        watched = sorted(self._watched_ids)
        members: list[discord.Member] = []
        for start in range(0, len(watched), MEMBER_QUERY_LIMIT):
            batch = watched[start : start + MEMBER_QUERY_LIMIT]
            logfire.info(
                "Requesting guild member chunk", guild_id=guild.id, members=len(batch)
            )
            members.extend(
                await guild.query_members(
                    user_ids=batch,
                    limit=MEMBER_QUERY_LIMIT,
                    presences=True,
                    cache=True,
                )
            )
        return members

    async def on_presence_update(
        self, before: discord.Member, after: discord.Member
    ) -> None:
        self._forward(after)

    async def on_error(self, event_method: str, /, *args: Any, **kwargs: Any) -> None:
        # A failing handler ends the connection; the supervisor reconnects
        logfire.exception("Discord event handler failed", event=event_method)
        await self.close()

    def _forward(self, member: discord.Member) -> None:
        if member.id not in self._watched_ids:
            return
        self._listener.on_presence(member.id, snapshot_from_member(member))


class RealPresenceGateway(PresenceGateway):
    """One discord.py connection."""

    def __init__(self, token: str, client: discord.Client) -> None:
        self._token = token
        self._client = client

    async def run(self) -> None:
        """Connect and stream until the connection ends."""
        # Reconnecting is left to the supervisor
        await self._client.start(self._token, reconnect=False)

    async def close(self) -> None:
        """Tear the connection down."""
        if not self._client.is_closed():
            await self._client.close()


class RealDiscordConnector(DiscordConnector):
    """Opens discord.py gateway connections for a bot token."""

    def __init__(self, bot_token: str | None, guild_ids: list[int]) -> None:
        """Initialize connector.

        Args:
            bot_token: Bot token
            guild_ids: Guilds whose members are chunked on ready
        """
        self.bot_token = bot_token
        self.guild_ids = list(guild_ids)

    def open_gateway(
        self, watched_ids: frozenset[int], listener: PresenceListener
    ) -> PresenceGateway:
        """Create a new discord.py connection."""
        if not self.bot_token:
            raise ValueError("Discord bot token must be configured")
        client = _PresenceClient(self.guild_ids, watched_ids, listener)
        return RealPresenceGateway(self.bot_token, client)


class MockPresenceGateway(PresenceGateway):
    """Replays snapshots, then either ends cleanly, fails or stays open."""

    def __init__(
        self,
        watched_ids: frozenset[int],
        listener: PresenceListener,
        snapshots: dict[int, PresenceSnapshot],
        error: Exception | None = None,
        hold_open: bool = False,
    ) -> None:
        self.watched_ids = watched_ids
        self.listener = listener
        self.snapshots = snapshots
        self.error = error
        self.hold_open = hold_open
        self.closed = False

    async def run(self) -> None:
        """Emit the configured events."""
        self.listener.on_connected()
        for discord_id, snapshot in self.snapshots.items():
            if discord_id in self.watched_ids:
                self.listener.on_presence(discord_id, snapshot)
        if self.error is not None:
            raise self.error
        if self.hold_open:
            await asyncio.Event().wait()

    async def close(self) -> None:
        """Mark closed."""
        self.closed = True


class MockDiscordConnector(DiscordConnector):
    """Mock connector for testing.

    Each call to ``open_gateway`` consumes the next entry of ``errors``
    (None meaning a clean close); once exhausted the gateway stays open.
    """

    def __init__(
        self,
        snapshots: dict[int, PresenceSnapshot] | None = None,
        errors: list[Exception | None] | None = None,
    ) -> None:
        self.snapshots = dict(snapshots or {})
        self.errors = list(errors or [])
        self.gateways: list[MockPresenceGateway] = []

    def open_gateway(
        self, watched_ids: frozenset[int], listener: PresenceListener
    ) -> PresenceGateway:
        """Create a scripted gateway."""
        if self.errors:
            error = self.errors.pop(0)
            gateway = MockPresenceGateway(
                watched_ids, listener, self.snapshots, error=error
            )
        else:
            gateway = MockPresenceGateway(
                watched_ids, listener, self.snapshots, hold_open=True
            )
        self.gateways.append(gateway)
        return gateway
