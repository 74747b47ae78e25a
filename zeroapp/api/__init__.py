"""HTTP API for ZeroApp Builder."""

from .app import create_app

__all__ = ["create_app"]
