"""User aggregate root.

Users are declared in configuration and never change while the process
runs. Each user carries the identifiers it is known by on every upstream
source; a missing identifier simply means the source is not tracked.
"""

from typing import Optional

from presence.domain.model.common import DomainModel


class User(DomainModel):
    """A configured person whose presence is aggregated."""

    username: str
    name: str
    aliases: list[str] = []
    pronouns: list[str] = []
    time_zone: str = "UTC"
    domain: Optional[str] = None
    owner_usernames: list[str] = []

    # Source keys
    discord_id: Optional[int] = None
    last_fm_username: Optional[str] = None
    steam_id: Optional[int] = None
    findmy_device_id: Optional[str] = None
