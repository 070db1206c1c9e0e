"""Access scope resolution for bearer tokens."""

import secrets
from typing import AbstractSet

from presence.config import AuthSettings
from presence.domain.service.base import Service
from presence.domain.value import Scope


class ScopeService(Service):
    """Maps bearer tokens to the scopes they grant.

    An unknown or missing token is not an authentication failure: it
    resolves to no scopes and the request carries on, with fields gated by
    scopes withheld.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize scope service.

        Args:
            auth_settings: Token to scope mapping from configuration
        """
        self._tokens: list[tuple[bytes, frozenset[str]]] = [
            (token.encode("utf-8"), frozenset(scopes))
            for token, scopes in auth_settings.tokens.items()
        ]

    def scopes_for(self, credential: str | None) -> frozenset[str]:
        """Resolve a bearer token to its scopes.

        Args:
            credential: Bearer token from the Authorization header, if any

        Returns:
            Granted scopes; empty for a missing or unrecognized token
        """
        if not credential:
            return frozenset()

        presented = credential.encode("utf-8")
        granted: frozenset[str] = frozenset()
        # Compare against every token so timing does not leak which one matched
        for token, scopes in self._tokens:
            if secrets.compare_digest(token, presented):
                granted = scopes
        return granted

    @staticmethod
    def has_scope(scopes: AbstractSet[str], name: Scope | str) -> bool:
        """Check whether a scope set grants a scope."""
        value = name.value if isinstance(name, Scope) else name
        return value in scopes
