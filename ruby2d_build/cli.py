import argparse
import logging
import sys

from . import __version__, console
from .clean import clean_up
from .config import Settings
from .errors import BuildError
from .targets import initialize_registry
from .toolchain import create_runner

logger = logging.getLogger("cli")


def build_parser(target_names) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ruby2d-build",
        description=f"Ruby 2D app builder v{__version__}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every command and file operation")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: build
    parser_build = subparsers.add_parser("build", help="Build a Ruby 2D application")
    targets = parser_build.add_mutually_exclusive_group()
    for name in target_names:
        targets.add_argument(
            f"--{name}", dest="target", action="store_const", const=name,
            help=f"Build the {name} target",
        )
    parser_build.add_argument("source", nargs="?", help="Ruby source file of the application")
    parser_build.add_argument("--debug", action="store_true", default=None,
                              help="Keep debug info and intermediate files")
    parser_build.add_argument("--gem-dir", help="Location of the ruby2d gem")
    parser_build.add_argument("--build-dir", help="Output directory (default: build)")

    # Command: clean
    parser_clean = subparsers.add_parser("clean", help="Remove intermediate build files")
    parser_clean.add_argument("--all", dest="everything", action="store_true",
                              help="Also remove built apps and projects")
    parser_clean.add_argument("--build-dir", help="Output directory (default: build)")

    # Command: targets
    subparsers.add_parser("targets", help="List build targets")

    # Command: version
    subparsers.add_parser("version", help="Print the version")

    return parser


def configure_logging(config: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv=None) -> int:
    registry = initialize_registry()
    parser = build_parser(registry.names())
    args = parser.parse_args(argv)

    config = Settings()
    configure_logging(config, args.verbose)

    if args.command == "build":
        config = config.with_overrides(
            DEBUG=args.debug,
            GEM_DIR=args.gem_dir,
            BUILD_DIR=args.build_dir,
        )
        runner = create_runner("local", timeout=config.COMMAND_TIMEOUT)
        target = args.target or "native"
        handler = registry.get_handler(target)
        logger.info(f"Building target '{target}' from {args.source}")
        try:
            handler(args.source, config, runner)
        except (BuildError, OSError) as e:
            console.error(e)
            sys.exit(1)

    elif args.command == "clean":
        config = config.with_overrides(BUILD_DIR=args.build_dir)
        try:
            clean_up(config, everything=args.everything)
        except OSError as e:
            console.error(f"Can't clean {config.BUILD_DIR}: {e}")
            sys.exit(1)

    elif args.command == "targets":
        for target in registry.list_targets():
            status = "" if target["enabled"] else " (disabled)"
            print(f"  {target['name']:<8} {target['description']}{status}")

    elif args.command == "version":
        print(f"ruby2d-build {__version__}")

    else:
        parser.print_help()

    return 0


if __name__ == "__main__":
    sys.exit(main())
