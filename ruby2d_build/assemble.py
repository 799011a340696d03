"""
Source assembly for the mruby toolchain.

mruby has no ``require``, so the whole Ruby 2D library is amalgamated into a
single ``lib.rb`` and the application's own ``require 'ruby2d'`` is dropped
before both are compiled to C bytecode arrays.

Files pass through byte for byte: line endings are not translated and bytes
that are not UTF-8 survive the round trip.
"""

import logging
import re
from pathlib import Path
from typing import Iterable

from .errors import GemNotFoundError, MissingArtifactError, SourceFileError

logger = logging.getLogger("assemble")

REQUIRE_RUBY2D = re.compile(r"""require ('|")ruby2d('|")""")

# A line is everything up to and including "\n"; the last one may lack it.
LINE = re.compile(r"[^\n]*\n|[^\n]+")

LIB_TRAILER = "\ninclude Ruby2D\nextend  Ruby2D::DSL\n"


def _read(path, error_cls=GemNotFoundError) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()
    except OSError as e:
        raise error_cls(f"Can't read file: {path}: {e.strerror or e}") from e


def _write(path, text: str) -> None:
    with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(text)


def make_lib(config, gem_dir: Path) -> Path:
    """Concatenate the library files, in order, into ``<build>/lib.rb``."""
    build_dir = Path(config.BUILD_DIR)
    build_dir.mkdir(parents=True, exist_ok=True)

    lib_dir = Path(gem_dir) / "lib" / "ruby2d"

    lib = ""
    for stem in config.LIB_FILES:
        path = lib_dir / f"{stem}.rb"
        if not path.exists():
            raise GemNotFoundError(f"Missing Ruby 2D library file: {path}")
        logger.debug(f"  + Ingesting {path.name}")
        lib += _read(path) + "\n\n"

    lib += LIB_TRAILER

    output_path = build_dir / "lib.rb"
    _write(output_path, lib)
    return output_path


def strip_require(path) -> str:
    """Return the file's text without any ``require 'ruby2d'`` line."""
    text = _read(path, SourceFileError)
    return "".join(
        line for line in LINE.findall(text)
        if not REQUIRE_RUBY2D.search(line)
    )


def write_app_source(source, config) -> Path:
    output_path = Path(config.BUILD_DIR) / "src.rb"
    _write(output_path, strip_require(source))
    return output_path


def compile_bytecode(source, config, runner, gem_dir: Path) -> None:
    """Build ``lib.c`` and ``src.c`` from the library and the app source."""
    build_dir = Path(config.BUILD_DIR)

    lib_rb = make_lib(config, gem_dir)
    runner.run(
        [config.MRBC, *config.debug_flags, "-Bruby2d_lib", f"-o{build_dir / 'lib.c'}", str(lib_rb)],
        timeout=config.COMMAND_TIMEOUT,
    )

    src_rb = write_app_source(source, config)
    runner.run(
        [config.MRBC, *config.debug_flags, "-Bruby2d_app", f"-o{build_dir / 'src.c'}", str(src_rb)],
        timeout=config.COMMAND_TIMEOUT,
    )


def combine_c_sources(dest, config, gem_dir: Path, defines: Iterable[str] = ("MRUBY",)) -> Path:
    """Write the defines, both bytecode files and the C extension into one file."""
    build_dir = Path(config.BUILD_DIR)
    dest = Path(dest)

    parts = [f"#define {name} 1\n\n" for name in defines]
    parts.append(_read(build_dir / "lib.c", MissingArtifactError) + "\n\n")
    parts.append(_read(build_dir / "src.c", MissingArtifactError) + "\n\n")
    parts.append(_read(Path(gem_dir) / "ext" / "ruby2d" / "ruby2d.c"))

    _write(dest, "".join(parts))
    logger.debug(f"Wrote {dest}")
    return dest
