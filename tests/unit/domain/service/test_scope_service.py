"""Unit tests for ScopeService."""

from presence.config import AuthSettings
from presence.domain.service import ScopeService
from presence.domain.value import Scope
from tests.harness import CITY_TOKEN, FULL_TOKEN


def make_service() -> ScopeService:
    return ScopeService(
        AuthSettings(
            tokens={
                CITY_TOKEN: ["icloud.city"],
                FULL_TOKEN: ["icloud.city", "icloud.latlong"],
            }
        )
    )


class TestScopesFor:
    """Tests for resolving bearer tokens to scopes."""

    def test_missing_credential_has_no_scopes(self):
        """Should grant nothing without a credential."""
        service = make_service()

        assert service.scopes_for(None) == frozenset()
        assert service.scopes_for("") == frozenset()

    def test_unknown_credential_has_no_scopes(self):
        """Should treat an unknown token as no scopes, not an error."""
        assert make_service().scopes_for("not-a-token") == frozenset()

    def test_known_credential_grants_its_scopes(self):
        """Should return exactly the configured scopes."""
        service = make_service()

        assert service.scopes_for(CITY_TOKEN) == frozenset({"icloud.city"})
        assert service.scopes_for(FULL_TOKEN) == frozenset(
            {"icloud.city", "icloud.latlong"}
        )

    def test_prefix_of_token_is_not_accepted(self):
        """Should require the whole token to match."""
        assert make_service().scopes_for(FULL_TOKEN[:-1]) == frozenset()

    def test_no_tokens_configured(self):
        """Should grant nothing when auth is not configured."""
        assert ScopeService(AuthSettings()).scopes_for(FULL_TOKEN) == frozenset()


class TestHasScope:
    """Tests for scope membership."""

    def test_accepts_enum_and_plain_names(self):
        """Should match both Scope members and scope strings."""
        scopes = frozenset({"icloud.city"})

        assert ScopeService.has_scope(scopes, Scope.LOCATION_CITY)
        assert ScopeService.has_scope(scopes, "icloud.city")
        assert not ScopeService.has_scope(scopes, Scope.LOCATION_LATLONG)

    def test_membership_is_exact(self):
        """Should not treat one scope as implying another."""
        scopes = frozenset({"icloud.latlong"})

        assert not ScopeService.has_scope(scopes, Scope.LOCATION_CITY)
        assert not ScopeService.has_scope(scopes, "icloud")
