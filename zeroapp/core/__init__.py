"""Core infrastructure components for ZeroApp Builder."""

from .config import Config, get_config
from .exceptions import PipelineError, ToolNotFoundError, ZeroAppError
from .logging import get_logger, setup_logging
from .types import Hash, ServiceResult, StageResult, StageStatus, StorageKey

__all__ = [
    "Config",
    "get_config",
    "ZeroAppError",
    "PipelineError",
    "ToolNotFoundError",
    "get_logger",
    "setup_logging",
    "Hash",
    "ServiceResult",
    "StageResult",
    "StageStatus",
    "StorageKey",
]
