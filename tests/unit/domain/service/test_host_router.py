"""Unit tests for HostRouter."""

import pytest

from presence.domain.service import HostRouter
from presence.persistence.repository import ConfigUserRepository
from tests.harness import make_user


@pytest.fixture
def router() -> HostRouter:
    return HostRouter(
        ConfigUserRepository(
            [
                make_user("alice", domain="alice.example"),
                make_user("bob", domain="Bob.Example"),
                make_user("carol"),
            ]
        )
    )


class TestHostRouter:
    """Tests for hostname to username resolution."""

    def test_resolves_configured_domain(self, router):
        """Should map a configured domain to its user."""
        assert router.resolve("alice.example") == "alice"

    @pytest.mark.parametrize(
        "host",
        ["ALICE.example", "alice.example:8443", "alice.example.", "Alice.Example.:80"],
    )
    def test_normalizes_hostname(self, router, host):
        """Should ignore case, port and trailing dot."""
        assert router.resolve(host) == "alice"

    def test_normalizes_configured_domain(self, router):
        """Should normalize the configured domain as well."""
        assert router.resolve("bob.example") == "bob"

    def test_unmapped_host_resolves_to_none(self, router):
        """Should return None for hosts no user owns."""
        assert router.resolve("api.example") is None
        assert router.resolve("example") is None
        assert router.resolve(None) is None
        assert router.resolve("") is None

    def test_subdomain_is_not_matched(self, router):
        """Should require an exact host match."""
        assert router.resolve("www.alice.example") is None

    def test_first_defined_user_keeps_colliding_domain(self):
        """Should keep the first user in configuration order on collision."""
        router = HostRouter(
            ConfigUserRepository(
                [
                    make_user("alice", domain="shared.example"),
                    make_user("bob", domain="SHARED.example"),
                ]
            )
        )

        assert router.resolve("shared.example") == "alice"
        assert router.domains == {"shared.example": "alice"}

    def test_is_user_domain(self, router):
        """Should report whether a host belongs to a user."""
        assert router.is_user_domain("alice.example:3000")
        assert not router.is_user_domain("localhost:3000")
