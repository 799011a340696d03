import logging
import shlex
from pathlib import Path

from .. import console
from ..assemble import combine_c_sources, compile_bytecode
from ..clean import clean_up
from ..config import resolve_gem_dir
from .common import check_build_src_file, require_toolchain

logger = logging.getLogger("native")


def simple2d_libs(config, runner):
    """Linker flags reported by ``simple2d --libs``."""
    result = runner.run([config.SIMPLE2D, "--libs"], timeout=config.COMMAND_TIMEOUT)
    return shlex.split(result.stdout)


def build_native(source, config, runner) -> Path:
    """Build a native executable of the app at ``<build>/app``."""
    check_build_src_file(source)
    require_toolchain(config, runner, ["MRBC", "SIMPLE2D", "CC"])
    gem_dir = resolve_gem_dir(config, runner)

    build_dir = Path(config.BUILD_DIR)
    app = build_dir / "app"
    try:
        compile_bytecode(source, config, runner, gem_dir)
        app_c = combine_c_sources(build_dir / "app.c", config, gem_dir, defines=["MRUBY"])

        logger.info(f"Linking {app}")
        runner.run(
            [config.CC, str(app_c), "-lmruby", *simple2d_libs(config, runner), "-o", str(app)],
            timeout=config.COMMAND_TIMEOUT,
        )
    finally:
        if not config.DEBUG:
            clean_up(config)

    console.success(f"Native app created at `{app}`")
    return app


build_target_defs = [
    {
        "name": "native",
        "description": "Native executable linked against MRuby and Simple 2D",
        "handler": "build_native",
    },
]
