"""
Unit tests for the authentication module.
"""

import base64
import hashlib
from unittest.mock import MagicMock

import httpx
import pytest

from keyguard.config.provider import AuthConfig
from keyguard.modules.auth import (
    AuthFactory,
    AuthenticatorError,
    RemoteAuthenticator,
    StaticAuthenticator,
)


# =============================================================================
# StaticAuthenticator
# =============================================================================


@pytest.fixture
def static_auth():
    """Static authenticator with a plain and a hashed entry."""
    hashed = hashlib.sha256(b"hashed-secret").hexdigest()
    return StaticAuthenticator(
        [
            "keyguard:supersecurepassword",
            f"deploy:sha256:{hashed}",
        ]
    )


@pytest.mark.asyncio
async def test_static_accepts_valid_credentials(static_auth):
    """Plain entries accept the exact password."""
    assert await static_auth.authenticate("keyguard", "supersecurepassword") is True


@pytest.mark.asyncio
async def test_static_rejects_wrong_password(static_auth):
    """Wrong passwords are rejected."""
    assert await static_auth.authenticate("keyguard", "supersecurepassword ") is False


@pytest.mark.asyncio
async def test_static_rejects_unknown_user(static_auth):
    """Unknown users are rejected rather than raising."""
    assert await static_auth.authenticate("nobody", "supersecurepassword") is False


@pytest.mark.asyncio
async def test_static_hashed_entry(static_auth):
    """Hashed entries compare the SHA-256 digest of the password."""
    assert await static_auth.authenticate("deploy", "hashed-secret") is True
    assert await static_auth.authenticate("deploy", "other") is False


@pytest.mark.asyncio
async def test_static_password_may_contain_colons():
    """Only the first colon separates username and password."""
    auth = StaticAuthenticator(["ops:a:b:c"])

    assert await auth.authenticate("ops", "a:b:c") is True


def test_static_skips_blank_entries():
    """Blank entries are ignored."""
    auth = StaticAuthenticator(["", "  ", "keyguard:pw"])

    assert auth.usernames == ("keyguard",)


@pytest.mark.parametrize("entry", ["no-separator", ":password-only"])
def test_static_rejects_malformed_entries(entry):
    """Entries without a username or separator are configuration errors."""
    with pytest.raises(ValueError):
        StaticAuthenticator([entry])


# =============================================================================
# RemoteAuthenticator
# =============================================================================


def remote_with_status(status_code: int, seen: list = None) -> RemoteAuthenticator:
    """Remote authenticator whose verification service answers with a fixed status."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code)

    return RemoteAuthenticator("https://auth.example.com/verify", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_remote_accepts_on_success():
    """2xx from the verification service accepts the credentials."""
    seen = []
    auth = remote_with_status(204, seen)

    assert await auth.authenticate("keyguard", "supersecurepassword") is True

    assert len(seen) == 1
    assert seen[0].method == "GET"
    expected = base64.b64encode(b"keyguard:supersecurepassword").decode("ascii")
    assert seen[0].headers["Authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403])
async def test_remote_rejects_on_denial(status_code):
    """401/403 from the verification service rejects the credentials."""
    auth = remote_with_status(status_code)

    assert await auth.authenticate("keyguard", "wrong") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [404, 500, 503])
async def test_remote_raises_on_unexpected_status(status_code):
    """Other statuses mean no verdict could be reached."""
    auth = remote_with_status(status_code)

    with pytest.raises(AuthenticatorError):
        await auth.authenticate("keyguard", "supersecurepassword")


@pytest.mark.asyncio
async def test_remote_raises_on_transport_error():
    """Connection failures surface as AuthenticatorError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    auth = RemoteAuthenticator("https://auth.example.com/verify", transport=httpx.MockTransport(handler))

    with pytest.raises(AuthenticatorError):
        await auth.authenticate("keyguard", "supersecurepassword")


def test_remote_requires_url():
    """A remote authenticator without a URL is a configuration error."""
    with pytest.raises(ValueError):
        RemoteAuthenticator("")


# =============================================================================
# AuthFactory
# =============================================================================


def provider_with(auth_config: AuthConfig) -> MagicMock:
    provider = MagicMock()
    provider.get_auth_config.return_value = auth_config
    return provider


def test_factory_builds_static():
    """The static backend yields a StaticAuthenticator."""
    auth = AuthFactory.build(provider_with(AuthConfig(backend="static", users=["keyguard:pw"])))

    assert isinstance(auth, StaticAuthenticator)
    assert auth.usernames == ("keyguard",)


def test_factory_builds_remote():
    """The remote backend yields a RemoteAuthenticator with the configured timeout."""
    auth = AuthFactory.build(
        provider_with(
            AuthConfig(backend="remote", remote_url="https://auth.example.com/verify", remote_timeout=2.5)
        )
    )

    assert isinstance(auth, RemoteAuthenticator)
    assert auth.url == "https://auth.example.com/verify"
    assert auth.timeout == 2.5


def test_factory_remote_without_url():
    """The remote backend requires a URL."""
    with pytest.raises(ValueError):
        AuthFactory.build(provider_with(AuthConfig(backend="remote")))


def test_factory_unknown_backend():
    """Unknown backends are rejected at startup."""
    with pytest.raises(ValueError, match="ldap"):
        AuthFactory.build(provider_with(AuthConfig(backend="ldap")))
