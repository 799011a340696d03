import logging
import shutil
from pathlib import Path

from .. import console
from ..assemble import combine_c_sources, compile_bytecode
from ..clean import clean_up
from ..config import resolve_gem_dir
from ..errors import GemNotFoundError, MissingFrameworkError
from .common import check_build_src_file, require_toolchain

logger = logging.getLogger("ios")

DEVICES = ("ios", "tvos")


def check_frameworks(config) -> None:
    frameworks = Path(config.FRAMEWORKS_DIR)
    required = [
        frameworks / "iOS" / "Simple2D.framework",
        frameworks / "tvOS" / "Simple2D.framework",
    ]
    if not all(path.exists() for path in required):
        raise MissingFrameworkError(
            "Simple 2D iOS and tvOS frameworks not found. Install them and try again."
        )


def build_ios_tvos(source, config, runner, device: str) -> Path:
    """Generate and build the Xcode project for ``device`` under ``<build>/<device>``."""
    if device not in DEVICES:
        raise ValueError(f"Unknown device: {device}")

    check_build_src_file(source)
    check_frameworks(config)
    require_toolchain(config, runner, ["MRBC", "SIMPLE2D"])
    gem_dir = resolve_gem_dir(config, runner)

    build_dir = Path(config.BUILD_DIR)
    project_dir = build_dir / device
    try:
        compile_bytecode(source, config, runner, gem_dir)

        template = Path(gem_dir) / "assets" / device
        if not template.is_dir():
            raise GemNotFoundError(f"Missing {device} project template: {template}")
        shutil.copytree(template, project_dir, dirs_exist_ok=True)
        logger.debug(f"Copied {device} project template to {project_dir}")

        combine_c_sources(project_dir / "main.c", config, gem_dir, defines=["RUBY2D_IOS_TVOS", "MRUBY"])

        runner.run(
            [config.SIMPLE2D, "build", f"--{device}", str(project_dir / "MyApp.xcodeproj")],
            timeout=config.COMMAND_TIMEOUT,
        )
    finally:
        if not config.DEBUG:
            clean_up(config)

    console.success(f"App created: `{project_dir}`")
    return project_dir


def build_ios(source, config, runner) -> Path:
    return build_ios_tvos(source, config, runner, "ios")


def build_tvos(source, config, runner) -> Path:
    return build_ios_tvos(source, config, runner, "tvos")


build_target_defs = [
    {
        "name": "ios",
        "description": "Xcode project for iOS",
        "handler": "build_ios",
    },
    {
        "name": "tvos",
        "description": "Xcode project for tvOS",
        "handler": "build_tvos",
    },
]
