"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authenticator based on configuration
- Wires dependencies together
- Returns only the Authenticator interface (hiding implementation)
"""

import logging

from .interfaces import Authenticator
from .remote import RemoteAuthenticator
from .static import StaticAuthenticator
from ...config.provider import ConfigProvider

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authenticator.

    This is the composition root that picks an implementation
    and returns only the public interface.
    """

    @staticmethod
    def build(config_provider: ConfigProvider) -> Authenticator:
        """
        Build the authenticator selected by configuration.

        Args:
            config_provider: Configuration provider

        Returns:
            Authenticator implementation

        Raises:
            ValueError: If the configured backend is unknown or incomplete
        """
        auth_config = config_provider.get_auth_config()

        if auth_config.backend == "static":
            authenticator = StaticAuthenticator(auth_config.users)
            if not authenticator.usernames:
                logger.warning("Static authenticator has no users; every key request will be rejected")
            else:
                logger.info(
                    f"Building static authenticator with {len(authenticator.usernames)} user(s)"
                )
            return authenticator

        if auth_config.backend == "remote":
            logger.info(f"Building remote authenticator against {auth_config.remote_url}")
            return RemoteAuthenticator(auth_config.remote_url, timeout=auth_config.remote_timeout)

        raise ValueError(
            f"Unknown authentication backend '{auth_config.backend}' (expected 'static' or 'remote')"
        )
