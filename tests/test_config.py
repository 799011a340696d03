from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ruby2d_build.config import DEFAULT_LIB_FILES, Settings, resolve_gem_dir
from ruby2d_build.errors import GemNotFoundError
from ruby2d_build.toolchain import CommandFailedError, ExecutionResult


def test_defaults():
    config = Settings()
    assert config.BUILD_DIR == Path("build")
    assert config.DEBUG is False
    assert config.MRBC == "mrbc"
    assert config.LIB_FILES == DEFAULT_LIB_FILES
    assert config.debug_flags == []


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RUBY2D_DEBUG", "true")
    monkeypatch.setenv("RUBY2D_CC", "clang")
    monkeypatch.setenv("RUBY2D_BUILD_DIR", "out")
    config = Settings()
    assert config.DEBUG is True
    assert config.CC == "clang"
    assert config.BUILD_DIR == Path("out")
    assert config.debug_flags == ["-g"]


def test_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("RUBY2D_SIMPLE2D=/opt/simple2d/bin/simple2d\n")
    assert Settings().SIMPLE2D == "/opt/simple2d/bin/simple2d"


def test_with_overrides_skips_none():
    config = Settings().with_overrides(DEBUG=None, BUILD_DIR="dist")
    assert config.DEBUG is False
    assert config.BUILD_DIR == "dist"


def test_resolve_gem_dir_from_setting(config, gem_dir):
    runner = MagicMock()
    assert resolve_gem_dir(config, runner) == gem_dir
    runner.run.assert_not_called()


def test_resolve_gem_dir_setting_must_exist(tmp_path):
    config = Settings(GEM_DIR=tmp_path / "missing")
    with pytest.raises(GemNotFoundError):
        resolve_gem_dir(config, MagicMock())


def test_resolve_gem_dir_from_rubygems():
    runner = MagicMock()
    runner.run.return_value = ExecutionResult(
        command=["gem", "which", "ruby2d"],
        stdout="/var/lib/gems/3.2.0/gems/ruby2d-0.9.4/lib/ruby2d.rb\n",
        stderr="",
        exit_code=0,
        duration_ms=1.0,
    )
    assert resolve_gem_dir(Settings(), runner) == Path("/var/lib/gems/3.2.0/gems/ruby2d-0.9.4")
    runner.run.assert_called_once()
    assert runner.run.call_args[0][0] == ["gem", "which", "ruby2d"]


def test_resolve_gem_dir_not_installed():
    runner = MagicMock()
    runner.run.side_effect = CommandFailedError(["gem", "which", "ruby2d"], 1, "Can't find ruby library file")
    with pytest.raises(GemNotFoundError, match="ruby2d gem"):
        resolve_gem_dir(Settings(), runner)
