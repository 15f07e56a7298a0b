"""
Request handlers for the served files.

The key handler is the authentication gate: the private key is only
disclosed after the injected Authenticator accepts the caller's HTTP Basic
credentials. Every rejection looks the same to the client.
"""

import base64
import binascii
import logging
from typing import Optional, Tuple

from fastapi import Request, Response

from ..auth.interfaces import Authenticator
from ..keys.store import KeyStore
from ...config.provider import Configuration

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("keyguard.audit")

CHALLENGE_HEADER = "Authenticate"
CHALLENGE_SCHEME = "KeyGuard"
CONTENT_TYPE = "text/plain"


def extract_basic_credentials(authorization: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Extract HTTP Basic credentials from an Authorization header value.

    Args:
        authorization: Raw Authorization header, if any

    Returns:
        Tuple of (username, password), or None if no usable credentials
    """
    if not authorization:
        return None

    scheme, _, encoded = authorization.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return None

    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
    except binascii.Error:
        return None

    try:
        decoded = raw.decode("utf-8")
    except UnicodeDecodeError:
        # Legacy clients send ISO-8859-1; every byte sequence decodes
        decoded = raw.decode("latin-1")

    if ":" not in decoded:
        return None

    username, password = decoded.split(":", 1)
    return username, password


class KeyServer:
    """
    Holds the configuration and authenticator shared by all requests.

    Neither is mutated here; handlers keep all per-request state local.
    """

    def __init__(self, config: Configuration, authenticator: Authenticator):
        """
        Initialize server.

        Args:
            config: Immutable configuration naming the served files
            authenticator: Credential verification capability
        """
        self.config = config
        self.authenticator = authenticator
        self.store = KeyStore(config)

    async def loader_handler(self, request: Request) -> Response:
        """Serve the loader script, unauthenticated."""
        body = await self.store.loader_script()
        return Response(content=body, media_type=CONTENT_TYPE)

    async def public_key_handler(self, request: Request) -> Response:
        """Serve the public key, unauthenticated."""
        body = await self.store.public_key()
        return Response(content=body, media_type=CONTENT_TYPE)

    async def key_handler(self, request: Request) -> Response:
        """
        Serve the private key to authenticated callers.

        Returns:
            200 with the private key if the Authenticator accepts the credentials,
            401 with the KeyGuard challenge header otherwise
        """
        client = request.client.host if request.client else None
        credentials = extract_basic_credentials(request.headers.get("Authorization"))

        if credentials is None:
            self._audit("denied", client, reason="missing_credentials")
            return self._reject()

        username, password = credentials

        try:
            verified = await self.authenticator.authenticate(username, password)
        except Exception as e:
            # Fail closed without exposing the cause
            logger.error(f"Authenticator error for user {username!r}: {e}")
            self._audit("denied", client, username=username, reason="authenticator_error")
            return self._reject()

        if verified is not True:
            self._audit("denied", client, username=username, reason="invalid_credentials")
            return self._reject()

        body = await self.store.private_key()
        self._audit("granted", client, username=username)
        return Response(content=body, media_type=CONTENT_TYPE)

    @staticmethod
    def _reject() -> Response:
        return Response(status_code=401, headers={CHALLENGE_HEADER: CHALLENGE_SCHEME})

    @staticmethod
    def _audit(
        outcome: str,
        client: Optional[str],
        username: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        """Record a key access decision. Passwords are never logged."""
        event = {
            "event": "key_access",
            "outcome": outcome,
            "username": username,
            "client": client,
            "reason": reason,
        }
        level = logging.INFO if outcome == "granted" else logging.WARNING
        # %r keeps client-supplied control characters on one line
        audit_logger.log(
            level,
            "key_access outcome=%s username=%r client=%s reason=%s",
            outcome,
            username,
            client,
            reason,
            extra={"audit": event},
        )
