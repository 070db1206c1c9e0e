"""Discord adapter."""

from .gateway import (
    DiscordConnector,
    MockDiscordConnector,
    MockPresenceGateway,
    PresenceGateway,
    PresenceListener,
    RealDiscordConnector,
    snapshot_from_member,
)

__all__ = [
    "DiscordConnector",
    "MockDiscordConnector",
    "MockPresenceGateway",
    "PresenceGateway",
    "PresenceListener",
    "RealDiscordConnector",
    "snapshot_from_member",
]
