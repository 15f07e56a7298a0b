"""Authentication interfaces following Black Box Design principles."""
from typing import Protocol


class AuthenticatorError(Exception):
    """Raised when an authenticator cannot reach a verdict."""


class Authenticator(Protocol):
    """Protocol for credential verification - allows swappable implementations.

    Implementations are shared across concurrent requests and must be safe
    for concurrent use.
    """

    async def authenticate(self, username: str, password: str) -> bool:
        """
        Verify a username/password pair.

        Args:
            username: Username exactly as supplied by the client
            password: Password exactly as supplied by the client

        Returns:
            True if the credentials are accepted, False if rejected

        Raises:
            AuthenticatorError: If the credentials could not be verified
        """
        ...
