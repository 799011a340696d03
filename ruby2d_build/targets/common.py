from pathlib import Path

from ..errors import SourceFileError

MRUBY_MISSING = "Can't find MRuby, which is needed to build native Ruby 2D applications."


def check_build_src_file(source) -> Path:
    """Fail before any side effect if the app source is unusable."""
    if not source:
        raise SourceFileError("Please provide a Ruby file to build")
    path = Path(source)
    if not path.is_file():
        raise SourceFileError(f"Can't find file: {source}")
    return path


def require_mruby(config, runner) -> None:
    runner.require(config.MRUBY, MRUBY_MISSING)


def require_toolchain(config, runner, tools) -> None:
    """Check MRuby and every named tool setting (e.g. "MRBC") before building."""
    require_mruby(config, runner)
    for setting in tools:
        name = getattr(config, setting)
        runner.require(name, f"Can't find `{name}`, which is needed to build this target.")
