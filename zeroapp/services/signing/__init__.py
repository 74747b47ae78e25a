"""Keystore generation."""

from .service import KeystoreInput, KeystoreService

__all__ = ["KeystoreInput", "KeystoreService"]
