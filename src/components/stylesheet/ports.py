"""
Stylesheet component port definitions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ContentSourcePort(Protocol):
    """Source files scanned for class tokens."""

    def glob(self, base_dir: Path, pattern: str) -> list[Path]:
        """Files matching pattern relative to base_dir, sorted."""
        ...

    def read_text(self, path: Path) -> str:
        """Read file content. Raises OSError / UnicodeDecodeError."""
        ...


class OutputWriterPort(Protocol):
    """Writes build output in one step."""

    def write_text(self, target: Path, content: str) -> Path:
        """Write content so readers never see a partial file."""
        ...
