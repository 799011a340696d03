"""Build Ruby 2D applications into native, macOS, iOS and tvOS bundles."""

__version__ = "0.1.0"
