"""Steam adapter."""

from .client import (
    MAX_IDS_PER_REQUEST,
    MockSteamClient,
    PlayerSummary,
    RealSteamClient,
    SteamClient,
    parse_app_list,
)

__all__ = [
    "MAX_IDS_PER_REQUEST",
    "MockSteamClient",
    "PlayerSummary",
    "RealSteamClient",
    "SteamClient",
    "parse_app_list",
]
