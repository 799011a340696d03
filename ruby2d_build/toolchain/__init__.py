from .base import (
    BaseRunner,
    CommandFailedError,
    CommandTimeoutError,
    ExecutionResult,
    ToolchainError,
    ToolNotFoundError,
)
from .factory import create_runner
from .local import LocalRunner

__all__ = [
    "BaseRunner",
    "CommandFailedError",
    "CommandTimeoutError",
    "ExecutionResult",
    "LocalRunner",
    "ToolchainError",
    "ToolNotFoundError",
    "create_runner",
]
