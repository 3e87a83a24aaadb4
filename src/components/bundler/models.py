"""
Bundler component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class BuildMode:
    """Flags taken from the command line."""

    watch: bool = False
    deploy: bool = False


@dataclass(frozen=True)
class BundlerOptions:
    """Resolved esbuild option set."""

    entry_points: tuple[str, ...]
    outdir: str
    cwd: Path
    bundle: bool = True
    target: str = "es2017"
    external: tuple[str, ...] = ()
    loader: tuple[tuple[str, str], ...] = ()
    log_level: str = "info"
    minify: bool = False
    watch: bool = False
    esbuild_path: str = "esbuild"


@dataclass(frozen=True)
class BundleResult:
    """Outcome of one bundler run."""

    success: bool
    args: list[str] = field(default_factory=list)
    returncode: int = 0
    error: str | None = None
