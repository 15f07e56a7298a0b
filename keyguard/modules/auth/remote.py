"""
Remote credential authenticator.

Delegates verification to an external HTTP endpoint. The credentials are
forwarded as HTTP Basic auth; the endpoint's status code is the verdict.
"""

from typing import Optional

import httpx

from .interfaces import AuthenticatorError

REJECTED_STATUSES = (401, 403)


class RemoteAuthenticator:
    """
    Authenticator delegating to an external verification service.

    - 2xx: credentials accepted
    - 401/403: credentials rejected
    - anything else, or a transport failure: AuthenticatorError
    """

    def __init__(self, url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize remote authenticator.

        Args:
            url: Verification endpoint URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not url:
            raise ValueError("Remote authenticator requires a verification URL")

        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def authenticate(self, username: str, password: str) -> bool:
        """
        Ask the remote service to verify the credentials.

        Args:
            username: Username from the request
            password: Password from the request

        Returns:
            True if accepted, False if rejected

        Raises:
            AuthenticatorError: If the service is unreachable or answers unexpectedly
        """
        # No connection state is shared between calls
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url, auth=(username, password))
        except httpx.HTTPError as e:
            raise AuthenticatorError(f"Verification service unreachable: {e}") from e

        if response.is_success:
            return True

        if response.status_code in REJECTED_STATUSES:
            return False

        raise AuthenticatorError(
            f"Verification service returned unexpected status {response.status_code}"
        )
