"""
Keys Module - Black Box Interface

Purpose: Provide the bytes of the served files
Interface: KeyStore.loader_script(), private_key(), public_key()
Hidden: File access, public key derivation from the private key
"""

from .store import KeyFileError, KeyStore, derive_public_key, read_file

__all__ = ["KeyFileError", "KeyStore", "derive_public_key", "read_file"]
