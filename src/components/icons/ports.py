"""
Icons component port definitions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .models import Declaration


class IconSourcePort(Protocol):
    """Filesystem access needed to scan and load icons."""

    def is_dir(self, path: Path) -> bool:
        """Return True if path is an existing directory."""
        ...

    def list_files(self, path: Path) -> list[Path]:
        """List regular files directly inside path, sorted by name."""
        ...

    def read_text(self, path: Path) -> str:
        """Read file content. Raises OSError if unreadable."""
        ...


class ClassResolverPort(Protocol):
    """Build-time extension consulted for each candidate class token."""

    def try_resolve(self, token: str) -> Declaration | None:
        """Return a declaration block, or None to decline the token."""
        ...


class ThemePort(Protocol):
    """Theme value lookup by dotted path, e.g. `spacing.6`."""

    def lookup(self, path: str) -> str:
        """Return the theme value. Raises KeyError if unknown."""
        ...
