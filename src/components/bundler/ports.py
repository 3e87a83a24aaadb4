"""
Bundler component port definitions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ProcessRunnerPort(Protocol):
    """Runs an external command."""

    def run(self, args: list[str], cwd: Path) -> int:
        """Run to completion and return the exit code.

        Raises FileNotFoundError if the executable is missing.
        """
        ...
