"""Discord infrastructure providers."""

from dishka import Scope, provide

from presence.adapter.discord import DiscordConnector, RealDiscordConnector
from presence.config import Settings
from presence.util.di.base import ProviderBase


class DiscordProvider(ProviderBase):
    """Discord component base."""

    __mock_component__ = "discord"


class ProdDiscordProvider(DiscordProvider):
    """Production Discord provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_discord_connector(self, settings: Settings) -> DiscordConnector:
        """Provide Discord gateway connector.

        Returns:
            Connector that opens discord.py gateway sessions
        """
        return RealDiscordConnector(
            bot_token=settings.discord.bot_token,
            guild_ids=settings.discord.guild_ids,
        )
