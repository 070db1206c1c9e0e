"""Game session snapshot from Steam."""

from typing import Optional

from presence.domain.model.common import DomainModel

UNKNOWN_GAME_NAME = "unknown game"


def store_info_url(app_id: int) -> str:
    """Storefront details URL for an app id."""
    return f"http://store.steampowered.com/api/appdetails?appids={app_id}&filters=basic"


class Game(DomainModel):
    """The game a player is currently in."""

    app_id: int
    name: str
    info_url: str


class GameSessionSnapshot(DomainModel):
    """Steam persona and current game of one player."""

    steam_id: str
    persona_name: str
    game: Optional[Game] = None
