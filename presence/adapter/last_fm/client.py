"""last.fm client.

Reads a user's recent tracks and picks out the one flagged as playing now.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
import logfire
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from presence.adapter.error import ProviderError
from presence.domain.model import Track, TrackImage

PROVIDER = "last.fm"


class _Text(BaseModel):
    text: str = Field(default="", alias="#text")


class _Image(BaseModel):
    size: str = ""
    text: str = Field(default="", alias="#text")


class _NowPlaying(BaseModel):
    nowplaying: Optional[str] = None


class _Date(BaseModel):
    uts: int


class _RecentTrack(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    artist: _Text
    album: Optional[_Text] = None
    image: list[_Image] = []
    url: Optional[str] = None
    date: Optional[_Date] = None
    attr: Optional[_NowPlaying] = Field(default=None, alias="@attr")

    @property
    def is_now_playing(self) -> bool:
        return self.attr is not None and self.attr.nowplaying == "true"

    def to_track(self) -> Track:
        return Track(
            artist=self.artist.text,
            name=self.name,
            album=self.album.text if self.album and self.album.text else None,
            images=[
                TrackImage(size=image.size, url=image.text)
                for image in self.image
                if image.text
            ],
            url=self.url,
            played_at=(
                datetime.fromtimestamp(self.date.uts, tz=timezone.utc)
                if self.date
                else None
            ),
        )


class _RecentTracks(BaseModel):
    track: list[_RecentTrack] = []

    @field_validator("track", mode="before")
    @classmethod
    def wrap_single_track(cls, v: Any) -> Any:
        """last.fm returns a bare object instead of a list for one track."""
        if isinstance(v, dict):
            return [v]
        return v


class _RecentTracksResponse(BaseModel):
    recenttracks: _RecentTracks


class LastFmClient(ABC):
    """Base class for last.fm clients."""

    @abstractmethod
    async def get_now_playing(self, username: str) -> Optional[Track]:
        """Get the track a user is playing right now.

        Args:
            username: last.fm username

        Returns:
            The now-playing track, or None if nothing is playing

        Raises:
            ProviderError: If the request or response parsing fails
        """
        pass


class RealLastFmClient(LastFmClient):
    """last.fm Web API client using ``user.getrecenttracks``."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://ws.audioscrobbler.com/2.0/",
        timeout: float = 30.0,
    ) -> None:
        """Initialize last.fm client.

        Args:
            api_key: last.fm API key
            base_url: API root
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    async def get_now_playing(self, username: str) -> Optional[Track]:
        """Get the track a user is playing right now."""
        if not self.api_key:
            raise ProviderError(PROVIDER, "API key not configured")

        params = {
            "method": "user.getrecenttracks",
            "format": "json",
            "user": username,
            "api_key": self.api_key,
            "limit": 1,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.base_url, params=params, timeout=self.timeout
                )
        except httpx.HTTPError as e:
            raise ProviderError(PROVIDER, f"HTTP error fetching {username}: {e}")

        if response.status_code != 200:
            logfire.warn(
                "last.fm request failed",
                username=username,
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(
                PROVIDER, f"Recent tracks request failed: {response.status_code}"
            )

        try:
            payload = response.json()
            if isinstance(payload, dict) and "error" in payload:
                raise ProviderError(
                    PROVIDER, f"API error {payload['error']}: {payload.get('message')}"
                )
            recent = _RecentTracksResponse.model_validate(payload)
        except (ValueError, ValidationError) as e:
            raise ProviderError(PROVIDER, f"Malformed recent tracks for {username}: {e}")

        playing = next(
            (track for track in recent.recenttracks.track if track.is_now_playing),
            None,
        )
        return playing.to_track() if playing else None


class MockLastFmClient(LastFmClient):
    """Mock last.fm client for testing.

    Returns the configured track per username without making real API
    calls; usernames listed in ``failing`` raise ``ProviderError``.
    """

    def __init__(
        self,
        now_playing: dict[str, Optional[Track]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.now_playing = dict(now_playing or {})
        self.failing = set(failing or ())
        self.calls: list[str] = []

    async def get_now_playing(self, username: str) -> Optional[Track]:
        """Return the configured track for the username."""
        self.calls.append(username)
        if username in self.failing:
            raise ProviderError(PROVIDER, f"mock failure for {username}")
        return self.now_playing.get(username)
