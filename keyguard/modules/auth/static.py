"""
Static credential authenticator.

Verifies usernames and passwords against a fixed table loaded from
configuration. The table is built once and never modified, so a single
instance can be shared by concurrent requests.
"""

import hashlib
import secrets
from typing import Dict, Iterable, Tuple

HASH_PREFIX = "sha256:"


class StaticAuthenticator:
    """
    Authenticator backed by an in-memory credential table.

    Entries use the format "username:password" or, to avoid keeping
    plaintext passwords in configuration, "username:sha256:<hexdigest>".
    """

    def __init__(self, entries: Iterable[str]):
        """
        Initialize from credential entries.

        Args:
            entries: Iterable of "username:password" strings

        Raises:
            ValueError: If an entry has no username or no separator
        """
        self._credentials: Dict[str, Tuple[bool, str]] = self._load_entries(entries)

    @staticmethod
    def _load_entries(entries: Iterable[str]) -> Dict[str, Tuple[bool, str]]:
        """Parse entries into {username: (is_hashed, secret)}."""
        credentials = {}

        for entry in entries:
            entry = entry.strip()
            if not entry:
                continue

            if ":" not in entry:
                raise ValueError("Credential entries must use the username:password format")

            username, secret = entry.split(":", 1)
            if not username:
                raise ValueError("Credential entries must include a username")

            if secret.startswith(HASH_PREFIX):
                credentials[username] = (True, secret[len(HASH_PREFIX):].lower())
            else:
                credentials[username] = (False, secret)

        return credentials

    @property
    def usernames(self) -> Tuple[str, ...]:
        """Configured usernames, for startup diagnostics."""
        return tuple(sorted(self._credentials))

    async def authenticate(self, username: str, password: str) -> bool:
        """
        Verify credentials against the static table.

        Args:
            username: Username from the request
            password: Password from the request

        Returns:
            True if the pair matches a configured entry, False otherwise
        """
        stored = self._credentials.get(username)
        if stored is None:
            return False

        is_hashed, secret = stored
        if is_hashed:
            candidate = hashlib.sha256(password.encode("utf-8")).hexdigest()
        else:
            candidate = password

        # Use constant-time comparison for security
        return secrets.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))
