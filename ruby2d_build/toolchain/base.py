from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..errors import BuildError, MissingToolError


class ToolchainError(BuildError):
    """Base error for external tool invocations."""


class ToolNotFoundError(ToolchainError):
    """The executable does not exist."""


class CommandFailedError(ToolchainError):
    """The tool ran but exited with a non-zero status."""

    def __init__(self, command: Sequence[str], exit_code: int, stderr: str = ""):
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"`{' '.join(self.command)}` exited with status {exit_code}"
        if stderr.strip():
            message += f":\n{stderr.strip()}"
        super().__init__(message)


class CommandTimeoutError(ToolchainError):
    """The tool did not finish in time."""


@dataclass
class ExecutionResult:
    command: List[str]
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float
    timed_out: bool = False
    meta: Dict[str, Any] = field(default_factory=dict)


class BaseRunner(ABC):
    """Runs external tools on behalf of the build drivers."""

    @abstractmethod
    def run(
        self,
        command: Sequence[str],
        cwd: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> ExecutionResult:
        """Run a command to completion, raising ToolchainError on failure."""

    @abstractmethod
    def which(self, name: str) -> Optional[str]:
        """Return the full path of an executable, or None."""

    def require(self, name: str, message: Optional[str] = None) -> str:
        """Like which(), but a missing tool is fatal."""
        path = self.which(name)
        if not path:
            raise MissingToolError(message or f"Can't find `{name}` on PATH.")
        return path
