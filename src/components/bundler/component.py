"""
Bundler component - esbuild invocation for the JavaScript entry points.

Key behaviors:
- `--deploy` enables minification; nothing else does
- `--watch` hands the rebuild loop to esbuild itself
- A non-zero exit or missing executable raises BundleError
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from src.config.models import BundlerRules
from src.core.errors import BundleError

from .models import BuildMode, BundleResult, BundlerOptions
from .ports import ProcessRunnerPort

logger = logging.getLogger(__name__)


def parse_mode(argv: Sequence[str]) -> BuildMode:
    """Read `--watch` / `--deploy` from raw arguments."""
    return BuildMode(watch="--watch" in argv, deploy="--deploy" in argv)


def options_from_rules(rules: BundlerRules, base_dir: Path, mode: BuildMode) -> BundlerOptions:
    return BundlerOptions(
        entry_points=tuple(rules.entry_points),
        outdir=rules.outdir,
        cwd=base_dir,
        bundle=rules.bundle,
        target=rules.target,
        external=tuple(rules.external),
        loader=tuple(sorted(rules.loader.items())),
        log_level=rules.log_level,
        minify=mode.deploy,
        watch=mode.watch,
        esbuild_path=rules.esbuild_path,
    )


def to_esbuild_args(options: BundlerOptions) -> list[str]:
    """Render options as an esbuild command line."""
    args = [options.esbuild_path, *options.entry_points]
    if options.bundle:
        args.append("--bundle")
    args.append(f"--target={options.target}")
    args.append(f"--outdir={options.outdir}")
    args.extend(f"--external:{pattern}" for pattern in options.external)
    args.extend(f"--loader:{ext}={kind}" for ext, kind in options.loader)
    args.append(f"--log-level={options.log_level}")
    if options.minify:
        args.append("--minify")
    if options.watch:
        args.append("--watch")
    return args


def on_rebuild(error: BaseException | None) -> None:
    """Rebuild notification used by watch mode."""
    if error is not None:
        logger.error("Esbuild: Failed to rebuild")
    else:
        logger.info("Esbuild: Rebuilt")


def run_bundle(options: BundlerOptions, *, runner: ProcessRunnerPort) -> BundleResult:
    """
    Run esbuild.

    Raises:
        BundleError: esbuild is missing or exited non-zero.
    """
    args = to_esbuild_args(options)
    logger.info("Running %s", " ".join(args))

    try:
        returncode = runner.run(args, options.cwd)
    except FileNotFoundError as e:
        raise BundleError(f"esbuild executable not found: {options.esbuild_path}") from e

    if returncode != 0:
        raise BundleError(f"esbuild exited with status {returncode}")

    return BundleResult(success=True, args=args, returncode=returncode)
