"""Hostname to user routing for vanity domains."""

import logfire

from presence.domain.repository import UserRepository
from presence.domain.service.base import Service
from presence.domain.value import Hostname


class HostRouter(Service):
    """Resolves a request hostname to the user that owns it.

    The domain table is built once from the user directory and never
    changes. When two users claim the same domain the one defined first in
    configuration keeps it.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Build the domain table.

        Args:
            user_repository: User directory to invert
        """
        self._domains: dict[str, str] = {}
        for user in user_repository.find_all():
            if not user.domain:
                continue

            domain = Hostname(user.domain).root
            owner = self._domains.get(domain)
            if owner is not None:
                logfire.warn(
                    "Domain claimed by more than one user, keeping first",
                    domain=domain,
                    kept=owner,
                    ignored=user.username,
                )
                continue
            self._domains[domain] = user.username

        logfire.info("Host routes built", domains=sorted(self._domains))

    def resolve(self, hostname: str | None) -> str | None:
        """Get the username owning a hostname.

        Args:
            hostname: Raw Host header value, port allowed

        Returns:
            Username, or None if the host is not a configured domain
        """
        if not hostname:
            return None
        return self._domains.get(Hostname(hostname).root)

    def is_user_domain(self, hostname: str | None) -> bool:
        """Whether the host is one of the configured vanity domains."""
        return self.resolve(hostname) is not None

    @property
    def domains(self) -> dict[str, str]:
        """Copy of the domain to username table."""
        return dict(self._domains)
