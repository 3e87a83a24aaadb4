"""
Icons component - Icon catalog building and class matching.

Scans an icons root holding one subdirectory per style/size and derives
`<file stem><suffix>` identifiers.

Invariants:
- I1: Every identifier maps to exactly one source path
- I2: Re-scanning unchanged directories yields an equal catalog
- I3: Earlier variant directories win identifier collisions
- I4: A missing root or variant directory degrades, never fails
"""

from __future__ import annotations

import logging
from pathlib import Path

from ._impl import IconClassMatcher, IconContentCache
from .models import (
    DEFAULT_VARIANT_DIRS,
    BuildCatalogInput,
    BuildCatalogOutput,
    IconCatalog,
    IconEntry,
    ResolvedVariantDirectory,
    VariantDirectory,
)
from .ports import IconSourcePort, ThemePort

logger = logging.getLogger(__name__)


def icon_base_name(path: Path) -> str:
    """File name without a trailing `.svg` extension."""
    if path.suffix == ".svg":
        return path.stem
    return path.name


def resolve_variant_dirs(
    root_dir: Path,
    variant_dirs: tuple[VariantDirectory, ...],
    source: IconSourcePort,
) -> tuple[ResolvedVariantDirectory, ...]:
    """Resolve each variant directory and record whether it exists."""
    resolved = []
    for declared in variant_dirs:
        path = root_dir / declared.relative_path
        resolved.append(ResolvedVariantDirectory(declared=declared, path=path, present=source.is_dir(path)))
    return tuple(resolved)


def run_build_catalog(inp: BuildCatalogInput, *, source: IconSourcePort) -> BuildCatalogOutput:
    """
    Build the icon catalog.

    Args:
        inp: Root directory and ordered variant directories.
        source: Filesystem port.

    Returns:
        BuildCatalogOutput with the catalog and any degradation warnings.
    """
    if not source.is_dir(inp.root_dir):
        message = f"Heroicons directory not found at: {inp.root_dir}"
        logger.warning(message)
        return BuildCatalogOutput(catalog=IconCatalog(), root_present=False, warnings=[message])

    directories = resolve_variant_dirs(inp.root_dir, inp.variant_dirs, source)
    entries: dict[str, IconEntry] = {}
    warnings: list[str] = []

    for directory in directories:
        if not directory.present:
            logger.debug("Skipping missing icon directory %s", directory.path)
            warnings.append(f"Icon directory not found: {directory.path}")
            continue

        for file_path in source.list_files(directory.path):
            identifier = icon_base_name(file_path) + directory.suffix
            if identifier in entries:
                logger.debug(
                    "Duplicate icon %s from %s ignored (kept %s)",
                    identifier,
                    file_path,
                    entries[identifier].source_path,
                )
                continue
            entries[identifier] = IconEntry(
                identifier=identifier,
                source_path=file_path,
                variant=directory.variant,
            )

    logger.info("Icon catalog built: %d icons from %s", len(entries), inp.root_dir)
    return BuildCatalogOutput(
        catalog=IconCatalog(entries),
        directories=directories,
        root_present=True,
        warnings=warnings,
    )


def build_catalog(
    root_dir: Path,
    variant_dirs: tuple[VariantDirectory, ...] = DEFAULT_VARIANT_DIRS,
    *,
    source: IconSourcePort,
) -> IconCatalog:
    """Convenience wrapper returning only the catalog."""
    return run_build_catalog(BuildCatalogInput(root_dir=root_dir, variant_dirs=variant_dirs), source=source).catalog


def create_matcher(
    catalog: IconCatalog,
    *,
    theme: ThemePort,
    source: IconSourcePort,
    prefix: str = "hero-",
) -> IconClassMatcher:
    """Create a matcher with a fresh per-build content cache."""
    return IconClassMatcher(catalog, theme, source, prefix=prefix, cache=IconContentCache())
