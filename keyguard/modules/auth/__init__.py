"""
Authentication Module - Black Box Interface

Purpose: Verify username/password pairs
Interface: Authenticator.authenticate(), AuthFactory.build()
Hidden: Credential storage, remote service protocol, comparison logic

This module can be completely replaced with any other auth implementation
(LDAP, external service, test double) without affecting other modules.
"""

from .factory import AuthFactory
from .interfaces import Authenticator, AuthenticatorError
from .remote import RemoteAuthenticator
from .static import StaticAuthenticator

__all__ = [
    "AuthFactory",
    "Authenticator",
    "AuthenticatorError",
    "RemoteAuthenticator",
    "StaticAuthenticator",
]
