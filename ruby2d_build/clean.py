import glob
import logging
import os
import shutil
from pathlib import Path
from typing import List

logger = logging.getLogger("clean")

INTERMEDIATE_PATTERNS = [
    "{src,lib}.{rb,c,js}",
    "ruby2d-opal.{rb,js}",
    "app.c",
]

ARTIFACT_FILES = ["app", "app.js", "app.html"]
ARTIFACT_DIRS = ["ios", "tvos"]


def _expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternations, which ``glob`` does not understand."""
    start = pattern.find("{")
    if start == -1:
        return [pattern]
    end = pattern.index("}", start)
    head, tail = pattern[:start], pattern[end + 1:]
    expanded = []
    for option in pattern[start + 1:end].split(","):
        expanded.extend(_expand_braces(head + option + tail))
    return expanded


def intermediate_files(build_dir) -> List[str]:
    found = []
    for pattern in INTERMEDIATE_PATTERNS:
        for name in _expand_braces(pattern):
            found.extend(glob.glob(os.path.join(glob.escape(str(build_dir)), name)))
    return sorted(set(found))


def clean_up(config, everything: bool = False) -> List[str]:
    """
    Remove intermediate build files.

    With ``everything`` the final artifacts (native executable, web files
    and the iOS/tvOS project trees) go too. Returns the removed paths.
    """
    build_dir = Path(config.BUILD_DIR)
    removed = []

    for path in intermediate_files(build_dir):
        os.remove(path)
        removed.append(path)

    if everything:
        print("cleaning up...")
        for name in ARTIFACT_FILES:
            path = build_dir / name
            if path.is_file() or path.is_symlink():
                path.unlink()
                removed.append(str(path))
        for name in ARTIFACT_DIRS:
            path = build_dir / name
            if path.is_dir():
                shutil.rmtree(path)
                removed.append(str(path))

    for path in removed:
        logger.debug(f"Removed {path}")
    return removed
