from typing import Dict, Optional

from .base import BaseRunner
from .local import LocalRunner

# Singleton cache: (type, timeout) -> instance
_RUNNER_CACHE: Dict[tuple, BaseRunner] = {}


def create_runner(runner_type: str = "local", timeout: Optional[int] = None) -> BaseRunner:
    """
    Factory to create or retrieve a runner instance.

    Args:
        runner_type: Only "local" is supported.
        timeout: Default per-command timeout in seconds.

    Raises:
        ValueError: If the runner type is unknown.
    """
    runner_type = runner_type.lower()
    cache_key = (runner_type, timeout)
    if cache_key in _RUNNER_CACHE:
        return _RUNNER_CACHE[cache_key]

    if runner_type == "local":
        runner = LocalRunner(default_timeout=timeout)
        _RUNNER_CACHE[cache_key] = runner
        return runner

    raise ValueError(f"Unknown runner type: {runner_type}")
