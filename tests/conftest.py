"""
conftest.py: shared fixtures for the build tool test suite.

1. ENV CLEANUP: RUBY2D_* variables are snapshotted and cleared around each
   test so a developer's shell or .env cannot change defaults.
2. FAKE GEM: a minimal ruby2d gem tree (library sources, C extension,
   iOS/tvOS project templates, icon) under tmp_path.
3. FAKE RUNNER: records commands and imitates mrbc, cc and simple2d by
   writing the files they would produce.
"""
import os
import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ruby2d_build.config import DEFAULT_LIB_FILES, Settings  # noqa: E402
from ruby2d_build.toolchain.base import (  # noqa: E402
    BaseRunner,
    CommandFailedError,
    ExecutionResult,
)


# ─── Environment Variable Safety ────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _clean_env_vars(tmp_path, monkeypatch):
    """Hide RUBY2D_* variables and any .env file in the working directory."""
    for key in list(os.environ):
        if key.startswith("RUBY2D_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    yield


# ─── Fake ruby2d gem ────────────────────────────────────────────────────────

@pytest.fixture
def gem_dir(tmp_path) -> Path:
    root = tmp_path / "gems" / "ruby2d-0.9.4"
    lib_dir = root / "lib" / "ruby2d"
    lib_dir.mkdir(parents=True)
    for stem in DEFAULT_LIB_FILES:
        (lib_dir / f"{stem}.rb").write_text(f"# {stem}\nmodule Ruby2D; end\n")
    (root / "lib" / "ruby2d.rb").write_text("require 'ruby2d/window'\n")

    ext_dir = root / "ext" / "ruby2d"
    ext_dir.mkdir(parents=True)
    (ext_dir / "ruby2d.c").write_text("/* ruby2d extension */\n")

    assets = root / "assets"
    for device in ("ios", "tvos"):
        project = assets / device / "MyApp.xcodeproj"
        project.mkdir(parents=True)
        (project / "project.pbxproj").write_text(f"// {device} project\n")
        (assets / device / "Info.plist").write_text("<plist/>\n")
    (assets / "app.icns").write_bytes(b"icns")
    return root


@pytest.fixture
def frameworks_dir(tmp_path) -> Path:
    root = tmp_path / "Frameworks" / "Simple2D"
    (root / "iOS" / "Simple2D.framework").mkdir(parents=True)
    (root / "tvOS" / "Simple2D.framework").mkdir(parents=True)
    return root


@pytest.fixture
def config(tmp_path, gem_dir, frameworks_dir) -> Settings:
    return Settings(
        GEM_DIR=gem_dir,
        BUILD_DIR=tmp_path / "build",
        FRAMEWORKS_DIR=frameworks_dir,
    )


@pytest.fixture
def app_source(tmp_path) -> Path:
    path = tmp_path / "app.rb"
    path.write_text(
        "require 'ruby2d'\n"
        "\n"
        "set title: 'Hello'\n"
        "Square.new\n"
        "show\n"
    )
    return path


# ─── Fake toolchain ─────────────────────────────────────────────────────────

class FakeRunner(BaseRunner):
    """Records commands instead of running them."""

    def __init__(self, missing=(), fail=()):
        self.commands = []
        self.missing = set(missing)
        self.fail = set(fail)

    def which(self, name):
        if name in self.missing:
            return None
        return f"/usr/local/bin/{name}"

    def run(self, command, cwd=None, timeout=None):
        cmd = [str(part) for part in command]
        self.commands.append(cmd)
        tool = cmd[0]

        if tool in self.fail:
            raise CommandFailedError(cmd, 1, f"{tool}: boom")

        stdout = ""
        if tool == "mrbc":
            out = next(arg[2:] for arg in cmd if arg.startswith("-o"))
            Path(out).write_text(f"/* bytecode for {cmd[-1]} */\n")
        elif tool == "cc":
            out = cmd[cmd.index("-o") + 1]
            Path(out).write_text("#!binary\n")
        elif tool == "simple2d" and cmd[1:] == ["--libs"]:
            stdout = "-lsimple2d -I/usr/local/include/SDL2 -lSDL2\n"

        return ExecutionResult(command=cmd, stdout=stdout, stderr="", exit_code=0, duration_ms=0.0)

    def tools(self):
        return [cmd[0] for cmd in self.commands]


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Build a FakeRunner with missing or failing tools."""
    return FakeRunner
