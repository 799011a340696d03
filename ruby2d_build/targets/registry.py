"""
Build target registry.

Target modules in this package declare ``build_target_defs``, a list of
dicts with ``name``, ``description``, ``handler`` (attribute name in the
module) and optionally ``enabled``. ``discover_targets`` imports every module
in the package and registers what it finds.
"""

import importlib
import logging
import pkgutil
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("targets")


class TargetRegistry:
    """Registry of build targets."""

    def __init__(self):
        self._targets: Dict[str, Dict[str, Any]] = {}
        self._handlers: Dict[str, Callable] = {}

    def register(self, name: str, handler: Callable, target_def: Dict[str, Any]):
        """Register a target."""
        self._targets[name] = {
            "name": name,
            "description": target_def.get("description", ""),
            "enabled": target_def.get("enabled", True),
        }
        self._handlers[name] = handler
        logger.debug(f"Registered target: {name}")

    def get_target(self, name: str) -> Optional[Dict[str, Any]]:
        return self._targets.get(name)

    def get_handler(self, name: str) -> Optional[Callable]:
        return self._handlers.get(name)

    def list_targets(self) -> List[Dict[str, Any]]:
        return list(self._targets.values())

    def names(self) -> List[str]:
        return list(self._targets)

    def discover_targets(self, package_path: str = "ruby2d_build.targets"):
        """Import each module of the package and register its targets."""
        package = importlib.import_module(package_path)
        prefix = package.__name__ + "."

        for _, name, is_pkg in pkgutil.iter_modules(package.__path__, prefix):
            if is_pkg:
                continue

            module = importlib.import_module(name)
            for target_def in getattr(module, "build_target_defs", []):
                target_name = target_def.get("name")
                handler = getattr(module, target_def.get("handler", ""), None)
                if handler and target_name:
                    self.register(target_name, handler, target_def)
                else:
                    logger.warning(f"Target definition found in {name} but no matching handler for {target_name}")


# Global Registry
registry = TargetRegistry()


def initialize_registry() -> TargetRegistry:
    """Populate the global registry on first use."""
    if not registry.list_targets():
        registry.discover_targets()
    return registry
