"""Aggregation of per-source snapshots into a user view."""

from typing import AbstractSet

import logfire

from presence.domain.error import NotFoundError
from presence.domain.model import (
    GameSessionSnapshot,
    LocationSnapshot,
    LocationView,
    PresenceSnapshot,
    ScrobbleSnapshot,
    User,
    UserAggregate,
    UserSummary,
)
from presence.domain.repository import SourceCache, UserRepository
from presence.domain.service.base import Service
from presence.domain.service.scope_service import ScopeService
from presence.domain.value import Scope


def redact_location(
    snapshot: LocationSnapshot, scopes: AbstractSet[str]
) -> tuple[LocationView, str | None]:
    """Reduce a location to the precision the scopes allow.

    Country is always visible. ``icloud.city`` reveals the locality;
    ``icloud.latlong`` reveals coordinates and the derived time zone.

    Args:
        snapshot: Cached location, left untouched
        scopes: Scopes granted to the request

    Returns:
        Tuple of (redacted view, time zone or None if withheld/unknown)
    """
    show_city = ScopeService.has_scope(scopes, Scope.LOCATION_CITY)
    show_latlong = ScopeService.has_scope(scopes, Scope.LOCATION_LATLONG)

    view = LocationView(
        country=snapshot.country,
        locality=snapshot.locality if show_city else None,
        latitude=snapshot.latitude if show_latlong else None,
        longitude=snapshot.longitude if show_latlong else None,
    )
    return view, snapshot.time_zone if show_latlong else None


class AggregationService(Service):
    """Composes one user's aggregate from every source cache.

    Entirely in memory: each source is read once, without waiting on any
    refresh in progress. Sources are refreshed independently, so one
    aggregate may combine snapshots of different ages.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        presence_cache: SourceCache[int, PresenceSnapshot],
        scrobble_cache: SourceCache[str, ScrobbleSnapshot],
        game_session_cache: SourceCache[int, GameSessionSnapshot],
        location_cache: SourceCache[str, LocationSnapshot],
    ) -> None:
        self.user_repository = user_repository
        self.presence_cache = presence_cache
        self.scrobble_cache = scrobble_cache
        self.game_session_cache = game_session_cache
        self.location_cache = location_cache

    def aggregate(self, username: str, scopes: AbstractSet[str]) -> UserAggregate:
        """Build the aggregate for a user.

        Args:
            username: Identity key of the user
            scopes: Scopes granted to the request

        Returns:
            Aggregate view

        Raises:
            NotFoundError: If the username is not configured
        """
        with logfire.span("aggregation_service.aggregate", username=username):
            user = self.user_repository.find_by_username(username)
            if user is None:
                logfire.info("User not found", username=username)
                raise NotFoundError("User", username)

            location: LocationView | None = None
            time_zone = user.time_zone
            if user.findmy_device_id is not None:
                snapshot = self.location_cache.get(user.findmy_device_id)
                if snapshot is not None:
                    location, derived_time_zone = redact_location(snapshot, scopes)
                    if derived_time_zone:
                        time_zone = derived_time_zone

            return UserAggregate(
                name=user.name,
                aliases=user.aliases,
                pronouns=user.pronouns,
                time_zone=time_zone,
                owners=self._owners(user),
                discord=(
                    self.presence_cache.get(user.discord_id)
                    if user.discord_id is not None
                    else None
                ),
                last_fm=(
                    self.scrobble_cache.get(user.last_fm_username)
                    if user.last_fm_username is not None
                    else None
                ),
                steam=(
                    self.game_session_cache.get(user.steam_id)
                    if user.steam_id is not None
                    else None
                ),
                location=location,
            )

    def _owners(self, user: User) -> list[UserSummary]:
        owners = []
        for owner_username in user.owner_usernames:
            owner = self.user_repository.find_by_username(owner_username)
            if owner is not None:
                owners.append(UserSummary(username=owner.username, name=owner.name))
        return owners
