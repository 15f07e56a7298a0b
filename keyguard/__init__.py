"""
KeyGuard - Authenticated SSH Key Distribution

An HTTP service that hands out a bootstrap loader script to anyone and an
SSH key pair to callers presenting valid credentials.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: Credential verification (static table, remote service)
- keys: Reading the served files and deriving public keys
- server: The request handlers gating disclosure of the private key
"""

__version__ = "1.0.0"
