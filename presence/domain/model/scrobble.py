"""Scrobble snapshot from last.fm."""

from datetime import datetime
from typing import Optional

from presence.domain.model.common import DomainModel


class TrackImage(DomainModel):
    """One size of a track's artwork."""

    size: str
    url: str


class Track(DomainModel):
    """A track as reported by last.fm."""

    artist: str
    name: str
    album: Optional[str] = None
    images: list[TrackImage] = []
    url: Optional[str] = None
    # Scrobble time; last.fm omits it for the now-playing track
    played_at: Optional[datetime] = None


class ScrobbleSnapshot(DomainModel):
    """What a last.fm user is listening to right now, if anything."""

    username: str
    currently_playing: Optional[Track] = None
