"""
Shared pytest fixtures for KeyGuard tests.

This module provides common fixtures including:
- RecordingAuthenticator: Authenticator double that records its calls
- Backing files (loader script, key pair) written to a temporary directory
- FastAPI test client utilities
"""

import os
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from keyguard.config.provider import Configuration
from keyguard.main import create_app

LOADER_SCRIPT = b"awesome loader script"
PRIVATE_KEY = b"awesome private key"
PUBLIC_KEY = b"ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAAAgQDBgps60FUrGlCFlH48 keyguard@test\n"


# =============================================================================
# Authenticator Doubles
# =============================================================================

@dataclass
class RecordingAuthenticator:
    """
    Authenticator double returning a fixed verdict.

    Usage:
        def test_gate(recording_auth):
            recording_auth.verdict = True
            ...
            assert recording_auth.calls == [("keyguard", "supersecurepassword")]
    """
    verdict: bool = False
    error: Optional[Exception] = None
    calls: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def called(self) -> int:
        return len(self.calls)

    async def authenticate(self, username: str, password: str) -> bool:
        self.calls.append((username, password))
        if self.error is not None:
            raise self.error
        return self.verdict


@pytest.fixture
def recording_auth():
    """Authenticator double that rejects by default."""
    return RecordingAuthenticator()


# =============================================================================
# Backing Files
# =============================================================================

@pytest.fixture
def key_dir(tmp_path):
    """Directory holding a loader script and a key pair."""
    (tmp_path / "loader.sh").write_bytes(LOADER_SCRIPT)
    (tmp_path / "id_rsa").write_bytes(PRIVATE_KEY)
    (tmp_path / "id_rsa.pub").write_bytes(PUBLIC_KEY)
    return tmp_path


@pytest.fixture
def config(key_dir):
    """Configuration pointing at the backing files."""
    return Configuration(
        loader_script=str(key_dir / "loader.sh"),
        ssh_key=str(key_dir / "id_rsa"),
    )


@pytest.fixture
def rsa_private_key_pem():
    """A freshly generated RSA private key in traditional PEM form."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


# =============================================================================
# FastAPI Test Client
# =============================================================================

@pytest.fixture
def client(config, recording_auth):
    """Test client for an app wired to the recording authenticator."""
    app = create_app(config, recording_auth)
    with TestClient(app) as test_client:
        yield test_client
