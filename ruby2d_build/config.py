"""
Build configuration.

Settings are read from the environment (``RUBY2D_`` prefix) or a local
``.env`` file. Build actions never read the module-level ``settings``
directly; the CLI resolves a ``Settings`` instance and passes it down.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import GemNotFoundError
from .toolchain.base import ToolchainError

logger = logging.getLogger("config")

# Order matters: later files reopen classes defined by earlier ones.
DEFAULT_LIB_FILES = [
    "renderable",
    "exceptions",
    "color",
    "window",
    "dsl",
    "quad",
    "line",
    "circle",
    "rectangle",
    "square",
    "triangle",
    "image",
    "sprite",
    "font",
    "text",
    "sound",
    "music",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RUBY2D_",
        env_file=".env",
        extra="ignore",
    )

    GEM_DIR: Optional[Path] = None
    BUILD_DIR: Path = Path("build")
    DEBUG: bool = False

    # External tools, looked up on PATH
    MRUBY: str = "mruby"
    MRBC: str = "mrbc"
    CC: str = "cc"
    OPAL: str = "opal"
    SIMPLE2D: str = "simple2d"
    GEM: str = "gem"

    FRAMEWORKS_DIR: Path = Path("/usr/local/Frameworks/Simple2D")
    LIB_FILES: List[str] = Field(default_factory=lambda: list(DEFAULT_LIB_FILES))

    COMMAND_TIMEOUT: int = 600
    LOG_LEVEL: str = "WARNING"

    @property
    def debug_flags(self) -> List[str]:
        """Extra ``mrbc`` flags; ``-g`` keeps debug info for backtraces."""
        return ["-g"] if self.DEBUG else []

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with the non-None overrides applied."""
        update = {k: v for k, v in overrides.items() if v is not None}
        return self.model_copy(update=update)


def resolve_gem_dir(config: Settings, runner) -> Path:
    """
    Locate the installed ``ruby2d`` gem.

    Uses ``GEM_DIR`` when set, otherwise asks RubyGems where ``ruby2d.rb``
    lives and walks up from ``<gem>/lib/ruby2d.rb``.
    """
    if config.GEM_DIR is not None:
        gem_dir = Path(config.GEM_DIR)
        if not gem_dir.is_dir():
            raise GemNotFoundError(f"Ruby 2D gem directory not found: {gem_dir}")
        return gem_dir

    try:
        result = runner.run([config.GEM, "which", "ruby2d"], timeout=config.COMMAND_TIMEOUT)
    except ToolchainError as e:
        raise GemNotFoundError(f"Can't find the ruby2d gem: {e}") from e

    lines = result.stdout.strip().splitlines()
    if not lines:
        raise GemNotFoundError("Can't find the ruby2d gem. Is it installed?")

    gem_dir = Path(lines[-1]).parent.parent
    logger.info(f"Resolved ruby2d gem at {gem_dir}")
    return gem_dir


settings = Settings()
