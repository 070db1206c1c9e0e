"""Infrastructure providers."""

# Import bases
from .discord import DiscordProvider
from .findmy import FindMyProvider
from .last_fm import LastFmProvider
from .persistence import ProdPersistenceProvider
from .steam import SteamProvider

# Import implementations (needed for __subclasses__())
from .discord import ProdDiscordProvider  # noqa: F401
from .findmy import ProdFindMyProvider  # noqa: F401
from .last_fm import ProdLastFmProvider  # noqa: F401
from .steam import ProdSteamProvider  # noqa: F401

__all__ = [
    "DiscordProvider",
    "FindMyProvider",
    "LastFmProvider",
    "ProdDiscordProvider",
    "ProdFindMyProvider",
    "ProdLastFmProvider",
    "ProdPersistenceProvider",
    "ProdSteamProvider",
    "SteamProvider",
]
