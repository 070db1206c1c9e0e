"""Unit tests for the Steam Web API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from presence.adapter.error import ProviderError
from presence.adapter.steam import (
    MAX_IDS_PER_REQUEST,
    PlayerSummary,
    RealSteamClient,
    parse_app_list,
)


def mock_response(status_code: int = 200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


class TestParseAppList:
    """Tests for parse_app_list."""

    def test_builds_id_to_name_mapping(self):
        """Should map app ids to names."""
        payload = {
            "applist": {
                "apps": [
                    {"appid": 570, "name": "Dota 2"},
                    {"appid": 730, "name": "Counter-Strike 2"},
                ]
            }
        }

        assert parse_app_list(payload) == {570: "Dota 2", 730: "Counter-Strike 2"}

    def test_skips_malformed_entries(self):
        """Should ignore entries without an int id and a str name."""
        payload = {
            "applist": {
                "apps": [
                    {"appid": "570", "name": "Dota 2"},
                    {"appid": 440},
                    "junk",
                    {"appid": 10, "name": "Counter-Strike"},
                ]
            }
        }

        assert parse_app_list(payload) == {10: "Counter-Strike"}

    @pytest.mark.parametrize(
        "payload", [None, [], {}, {"applist": []}, {"applist": {"apps": None}}]
    )
    def test_missing_apps_array_raises(self, payload):
        """Should raise ProviderError when applist.apps is missing."""
        with pytest.raises(ProviderError):
            parse_app_list(payload)

    def test_empty_list_parses_to_empty_catalog(self):
        """Should return an empty mapping for an empty list."""
        assert parse_app_list({"applist": {"apps": []}}) == {}


class TestGetPlayerSummaries:
    """Tests for RealSteamClient.get_player_summaries."""

    @pytest.mark.asyncio
    async def test_parses_players(self):
        """Should parse players, with and without a current game."""
        payload = {
            "response": {
                "players": [
                    {
                        "steamid": "76561197960287930",
                        "personaname": "alice",
                        "gameid": "570",
                        "gameextrainfo": "Dota 2",
                    },
                    {"steamid": "76561197960287931", "personaname": "bob"},
                ]
            }
        }

        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=mock_response(payload=payload))
            mock_client.return_value.__aenter__.return_value.get = get

            players = await RealSteamClient(api_key="key").get_player_summaries(
                [76561197960287930, 76561197960287931]
            )

        assert players == [
            PlayerSummary(
                steam_id=76561197960287930,
                persona_name="alice",
                game_id=570,
                game_name="Dota 2",
            ),
            PlayerSummary(steam_id=76561197960287931, persona_name="bob"),
        ]
        args, kwargs = get.call_args
        assert args == (
            "https://api.steampowered.com/ISteamUser/GetPlayerSummaries/v2/",
        )
        assert kwargs["params"] == {
            "key": "key",
            "steamids": "76561197960287930,76561197960287931",
        }

    @pytest.mark.asyncio
    async def test_rejects_oversized_batch(self):
        """Should refuse more ids than one request accepts."""
        with pytest.raises(ValueError):
            await RealSteamClient(api_key="key").get_player_summaries(
                list(range(MAX_IDS_PER_REQUEST + 1))
            )

    @pytest.mark.asyncio
    async def test_empty_batch_makes_no_request(self):
        """Should return nothing without calling Steam."""
        with patch("httpx.AsyncClient") as mock_client:
            assert await RealSteamClient(api_key="key").get_player_summaries([]) == []

        mock_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        """Should raise ProviderError for a non-200 status."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=mock_response(status_code=429, payload={})
            )

            with pytest.raises(ProviderError, match="429"):
                await RealSteamClient(api_key="key").get_player_summaries([1])

    @pytest.mark.asyncio
    async def test_malformed_payload_raises(self):
        """Should raise ProviderError when the response shape is wrong."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=mock_response(payload={"players": []})
            )

            with pytest.raises(ProviderError, match="Malformed"):
                await RealSteamClient(api_key="key").get_player_summaries([1])

    @pytest.mark.asyncio
    async def test_missing_api_key_raises(self):
        """Should refuse to call the API without a key."""
        with pytest.raises(ProviderError):
            await RealSteamClient(api_key=None).get_player_summaries([1])


class TestGetAppList:
    """Tests for RealSteamClient.get_app_list."""

    @pytest.mark.asyncio
    async def test_fetches_catalog(self):
        """Should request GetAppList and parse it."""
        payload = {"applist": {"apps": [{"appid": 570, "name": "Dota 2"}]}}

        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=mock_response(payload=payload))
            mock_client.return_value.__aenter__.return_value.get = get

            apps = await RealSteamClient(
                api_key="key", base_url="https://steam.test/"
            ).get_app_list()

        assert apps == {570: "Dota 2"}
        assert get.call_args.args == ("https://steam.test/ISteamApps/GetAppList/v2/",)
