"""
Server Module - Black Box Interface

Purpose: Answer requests for the loader script and the SSH key pair
Interface: KeyServer.loader_handler(), public_key_handler(), key_handler()
Hidden: Credential extraction, audit records, file access

The handlers only orchestrate - credential verification is delegated to
the injected Authenticator and file access to the keys module.
"""

from .server import CHALLENGE_HEADER, CHALLENGE_SCHEME, KeyServer, extract_basic_credentials

__all__ = ["CHALLENGE_HEADER", "CHALLENGE_SCHEME", "KeyServer", "extract_basic_credentials"]
