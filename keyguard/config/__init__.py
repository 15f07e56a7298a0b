"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: ConfigProvider.get_key_config(), get_api_config(), get_auth_config()
Hidden: Config sources (environment, YAML/JSON file), parsing and defaults
"""

from .provider import (
    APIConfig,
    AuthConfig,
    ConfigProvider,
    Configuration,
    EnvConfigProvider,
    FileConfigProvider,
)

__all__ = [
    "APIConfig",
    "AuthConfig",
    "ConfigProvider",
    "Configuration",
    "EnvConfigProvider",
    "FileConfigProvider",
]
