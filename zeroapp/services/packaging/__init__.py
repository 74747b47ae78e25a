"""Artifact packaging."""

from .service import PackagingInput, PackagingService

__all__ = ["PackagingInput", "PackagingService"]
