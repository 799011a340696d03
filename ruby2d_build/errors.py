class BuildError(Exception):
    """Base error for a build that cannot continue."""


class SourceFileError(BuildError):
    """The application source file is missing or was not given."""


class MissingToolError(BuildError):
    """A required executable is not on PATH."""


class MissingFrameworkError(BuildError):
    """The Simple 2D iOS/tvOS frameworks are not installed."""


class GemNotFoundError(BuildError):
    """The ruby2d gem (and its library sources) could not be located."""


class MissingArtifactError(BuildError):
    """An input produced by an earlier build step does not exist."""
