"""sortcheck - static checker for sorted enum members and match arms."""

from importlib.metadata import version

try:
    __version__ = version("sortcheck")
except Exception:
    __version__ = "0.0.0-dev"
