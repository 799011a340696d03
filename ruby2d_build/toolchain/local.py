import logging
import shutil
import subprocess
import time
from typing import Optional, Sequence

from .base import (
    BaseRunner,
    CommandFailedError,
    CommandTimeoutError,
    ExecutionResult,
    ToolNotFoundError,
)

logger = logging.getLogger("toolchain")


class LocalRunner(BaseRunner):
    """Runs tools as blocking subprocesses on the host."""

    def __init__(self, default_timeout: Optional[int] = None):
        self.default_timeout = default_timeout

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def run(
        self,
        command: Sequence[str],
        cwd: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> ExecutionResult:
        cmd = [str(part) for part in command]
        if timeout is None:
            timeout = self.default_timeout

        logger.info(f"Running: {' '.join(cmd)}")
        start_time = time.time()

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                cwd=cwd,
            )
        except FileNotFoundError:
            raise ToolNotFoundError(f"Can't find `{cmd[0]}` on PATH.")
        except subprocess.TimeoutExpired:
            raise CommandTimeoutError(f"`{' '.join(cmd)}` timed out after {timeout}s")

        duration_ms = (time.time() - start_time) * 1000
        stdout_str = result.stdout or ""
        stderr_str = result.stderr or ""

        if stderr_str:
            logger.debug(f"{cmd[0]} stderr: {stderr_str.strip()}")

        if result.returncode != 0:
            raise CommandFailedError(cmd, result.returncode, stderr_str)

        logger.debug(f"{cmd[0]} finished in {duration_ms:.0f}ms")
        return ExecutionResult(
            command=cmd,
            stdout=stdout_str,
            stderr=stderr_str,
            exit_code=result.returncode,
            duration_ms=duration_ms,
        )
