import logging
import plistlib
import shutil
from pathlib import Path

from .. import console
from ..config import resolve_gem_dir
from ..errors import MissingArtifactError
from .native import build_native

logger = logging.getLogger("macos")

INFO_PLIST = {
    "CFBundleExecutable": "app",
    "CFBundleIconFile": "app.icns",
    "CFBundleInfoDictionaryVersion": "6.0",
    "CFBundlePackageType": "APPL",
    "CFBundleVersion": "1",
    "NSHighResolutionCapable": "True",
}


def build_macos(config, gem_dir=None) -> Path:
    """Wrap an existing ``<build>/app`` into ``<build>/App.app``."""
    build_dir = Path(config.BUILD_DIR)
    app = build_dir / "app"
    if not app.is_file():
        raise MissingArtifactError(f"Native app not found at `{app}`. Build it first.")

    contents = build_dir / "App.app" / "Contents"
    (contents / "MacOS").mkdir(parents=True, exist_ok=True)
    (contents / "Resources").mkdir(parents=True, exist_ok=True)

    with open(contents / "Info.plist", "wb") as f:
        plistlib.dump(INFO_PLIST, f)

    shutil.copy2(app, contents / "MacOS" / "app")

    if gem_dir is not None:
        icon = Path(gem_dir) / "assets" / "app.icns"
        if icon.is_file():
            shutil.copy2(icon, contents / "Resources" / "app.icns")
        else:
            logger.debug(f"No app icon at {icon}")

    bundle = build_dir / "App.app"
    console.success(f"macOS app bundle created: `{bundle}`")
    return bundle


def build_macos_app(source, config, runner) -> Path:
    build_native(source, config, runner)
    return build_macos(config, resolve_gem_dir(config, runner))


build_target_defs = [
    {
        "name": "macos",
        "description": "macOS .app bundle around the native executable",
        "handler": "build_macos_app",
    },
]
