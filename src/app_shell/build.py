"""
Build orchestration: config -> icon catalog -> matcher -> stylesheet, and
config -> esbuild.

Every call starts from scratch: a fresh catalog, matcher and content cache
per build. Nothing is shared between builds.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.adapters.esbuild import SubprocessRunner
from src.adapters.fs.source import AtomicFileWriter, FileSystemContentSource, FileSystemIconSource
from src.components.bundler import BuildMode, BundleResult, ProcessRunnerPort, options_from_rules, run_bundle
from src.components.icons import BuildCatalogInput, BuildCatalogOutput, IconSourcePort, create_matcher, run_build_catalog
from src.components.stylesheet import (
    BuildStylesheetInput,
    BuildStylesheetOutput,
    ContentSourcePort,
    OutputWriterPort,
    Theme,
    run_build_stylesheet,
)
from src.config.models import AssetsConfig

logger = logging.getLogger(__name__)


def build_icon_catalog(config: AssetsConfig, icon_source: IconSourcePort | None = None) -> BuildCatalogOutput:
    return run_build_catalog(
        BuildCatalogInput(root_dir=config.icons_root, variant_dirs=config.css.icons.to_variant_dirs()),
        source=icon_source or FileSystemIconSource(),
    )


def build_css(
    config: AssetsConfig,
    *,
    icon_source: IconSourcePort | None = None,
    content_source: ContentSourcePort | None = None,
    writer: OutputWriterPort | None = None,
    write: bool = True,
) -> BuildStylesheetOutput:
    """
    Build the stylesheet.

    Raises:
        IconSourceUnreadableError: a matched icon could not be read; no
            output is written.
    """
    icon_source = icon_source or FileSystemIconSource()
    catalog_out = build_icon_catalog(config, icon_source)

    theme = Theme.from_rules(config.css.colors, config.css.spacing)
    matcher = create_matcher(
        catalog_out.catalog,
        theme=theme,
        source=icon_source,
        prefix=config.css.icons.prefix,
    )

    inp = BuildStylesheetInput(
        content_globs=tuple(config.css.content),
        base_dir=config.base_dir,
        output_path=config.css_output if write else None,
        variants={name: tuple(selectors) for name, selectors in config.css.variants.items()},
    )
    out = run_build_stylesheet(
        inp,
        resolvers=[matcher],
        source=content_source or FileSystemContentSource(),
        writer=writer or AtomicFileWriter(),
    )
    out.warnings = catalog_out.warnings + out.warnings
    return out


def build_js(config: AssetsConfig, mode: BuildMode, runner: ProcessRunnerPort | None = None) -> BundleResult:
    options = options_from_rules(config.bundler, config.base_dir, mode)
    return run_bundle(options, runner=runner or SubprocessRunner())


def snapshot_mtimes(config: AssetsConfig, content_source: ContentSourcePort | None = None) -> dict[str, float]:
    """Modification times of every file a CSS build reads."""
    content_source = content_source or FileSystemContentSource()
    paths: set[Path] = set()
    for pattern in config.css.content:
        paths.update(content_source.glob(config.base_dir, pattern))

    icons_root = config.icons_root
    if icons_root.is_dir():
        paths.update(p for p in icons_root.rglob("*") if p.is_file())

    snapshot = {}
    for path in paths:
        try:
            snapshot[str(path)] = path.stat().st_mtime
        except OSError:
            # Deleted between listing and stat; the next poll sees it gone
            continue
    return snapshot


def on_css_rebuild(error: BaseException | None) -> None:
    """Rebuild notification for the stylesheet watcher."""
    if error is not None:
        logger.error("Stylesheet: Failed to rebuild: %s", error)
    else:
        logger.info("Stylesheet: Rebuilt")
