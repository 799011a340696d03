from .registry import TargetRegistry, initialize_registry, registry

__all__ = ["TargetRegistry", "initialize_registry", "registry"]
