"""Android project code generation."""

from .service import CodegenInput, CodegenService

__all__ = ["CodegenInput", "CodegenService"]
