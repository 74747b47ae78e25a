"""
ZeroApp Builder services.

Each service handles one step of turning a project description into a
downloadable artifact.
"""

from .codegen import CodegenService
from .packaging import PackagingService
from .renderer import UiTreeRenderer
from .signing import KeystoreService

__all__ = [
    "CodegenService",
    "KeystoreService",
    "PackagingService",
    "UiTreeRenderer",
]
