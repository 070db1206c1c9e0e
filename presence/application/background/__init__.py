"""Background refresh jobs."""

from .base import BackgroundJob, PollingJob
from .presence_stream import PresenceStreamSupervisor, StreamState
from .findmy import FindMyRefresher
from .last_fm import LastFmRefresher
from .scheduler import BackgroundRefresher
from .steam import SteamCatalogRefresher, SteamRefresher

__all__ = [
    "BackgroundJob",
    "BackgroundRefresher",
    "FindMyRefresher",
    "LastFmRefresher",
    "PollingJob",
    "PresenceStreamSupervisor",
    "SteamCatalogRefresher",
    "SteamRefresher",
    "StreamState",
]
