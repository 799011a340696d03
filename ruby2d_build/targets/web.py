from .. import console

DISABLED_MESSAGE = "This feature is currently disabled while it's being upgraded."


def build_web(source, config, runner) -> None:
    """Disabled: warns and returns without touching the build directory."""
    console.warn(DISABLED_MESSAGE)


build_target_defs = [
    {
        "name": "web",
        "description": "JavaScript bundle via Opal (disabled)",
        "handler": "build_web",
        "enabled": False,
    },
]
