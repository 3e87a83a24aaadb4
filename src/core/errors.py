"""
Build error taxonomy.

Fatal errors derive from BuildError and abort the invoking process with a
non-zero exit. Degraded conditions (missing icon directories) are logged
instead of raised.
"""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Fatal asset build failure."""


class ConfigError(ValueError):
    """Asset configuration file has invalid syntax or schema."""


class IconSourceUnreadableError(BuildError):
    """An icon in the catalog could not be read while building."""

    def __init__(self, identifier: str, path: Path, reason: str = "") -> None:
        self.identifier = identifier
        self.path = path
        message = f"Cannot read icon '{identifier}' from {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BundleError(BuildError):
    """The JavaScript bundler failed or could not be started."""
