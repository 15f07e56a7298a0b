"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import yaml


@dataclass(frozen=True)
class Configuration:
    """Paths of the files served by KeyGuard.

    Constructed once at startup and shared read-only by every request.
    """
    loader_script: str
    ssh_key: str
    public_key: str = ""
    public_key_defaulted: bool = field(init=False, default=False)

    def __post_init__(self):
        # Sibling path convention: id_rsa -> id_rsa.pub
        if not self.public_key and self.ssh_key:
            object.__setattr__(self, "public_key", f"{self.ssh_key}.pub")
            object.__setattr__(self, "public_key_defaulted", True)


@dataclass(frozen=True)
class APIConfig:
    """API configuration."""
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"


@dataclass(frozen=True)
class AuthConfig:
    """Authentication configuration."""
    backend: str = "static"
    users: List[str] = field(default_factory=list)
    remote_url: Optional[str] = None
    remote_timeout: float = 5.0


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_key_config(self) -> Configuration:
        """Get the served file paths."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...


def _split_entries(raw: Optional[str]) -> List[str]:
    """Split a comma-separated environment value, dropping blanks."""
    if not raw:
        return []
    return [entry.strip() for entry in raw.split(",") if entry.strip()]


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_key_config(self) -> Configuration:
        """Get the served file paths from environment variables."""
        loader_script = os.getenv("KEYGUARD_LOADER_SCRIPT")
        ssh_key = os.getenv("KEYGUARD_SSH_KEY")

        # Both paths are required - there is nothing sensible to default to
        missing = [
            name
            for name, value in (
                ("KEYGUARD_LOADER_SCRIPT", loader_script),
                ("KEYGUARD_SSH_KEY", ssh_key),
            )
            if not value
        ]
        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Set them to the loader script and SSH private key paths."
            )

        return Configuration(
            loader_script=loader_script,
            ssh_key=ssh_key,
            public_key=os.getenv("KEYGUARD_PUBLIC_KEY", ""),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        return AuthConfig(
            backend=os.getenv("KEYGUARD_AUTH_BACKEND", "static").lower(),
            users=_split_entries(os.getenv("KEYGUARD_USERS")),
            remote_url=os.getenv("KEYGUARD_AUTH_URL"),
            remote_timeout=float(os.getenv("KEYGUARD_AUTH_TIMEOUT", "5.0")),
        )


class FileConfigProvider:
    """YAML (or JSON) file based configuration provider.

    Expected layout::

        loader_script: /srv/keyguard/loader.sh
        ssh_key: /srv/keyguard/id_rsa
        public_key: /srv/keyguard/id_rsa.pub   # optional
        auth:
          backend: static
          users: ["deploy:secret"]
        api:
          port: 8080
    """

    def __init__(self, path: str):
        self.path = path
        self._data = self._load()

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Unable to load configuration file {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {self.path} must contain a mapping")
        return data

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._data.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Configuration section '{name}' must be a mapping")
        return section

    def get_key_config(self) -> Configuration:
        """Get the served file paths from the configuration file."""
        missing = [key for key in ("loader_script", "ssh_key") if not self._data.get(key)]
        if missing:
            raise ValueError(
                f"Missing required configuration keys in {self.path}: {', '.join(missing)}"
            )

        return Configuration(
            loader_script=str(self._data["loader_script"]),
            ssh_key=str(self._data["ssh_key"]),
            public_key=str(self._data.get("public_key") or ""),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from the configuration file."""
        api = self._section("api")
        return APIConfig(
            host=str(api.get("host", "0.0.0.0")),
            port=int(api.get("port", 8080)),
            log_level=str(api.get("log_level", "INFO")).upper(),
        )

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from the configuration file."""
        auth = self._section("auth")
        users = auth.get("users") or []
        if isinstance(users, str):
            users = _split_entries(users)

        return AuthConfig(
            backend=str(auth.get("backend", "static")).lower(),
            users=[str(user) for user in users],
            remote_url=auth.get("url"),
            remote_timeout=float(auth.get("timeout", 5.0)),
        )
