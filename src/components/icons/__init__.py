"""
Icons component - Build-time icon catalog and class matcher.

Discovers SVG icons by style directory and resolves `hero-*` class
tokens into masked data-URI declarations.
"""

from ._impl import (
    ICON_PREFIX,
    ICON_SIZE_PATHS,
    IconClassMatcher,
    IconContentCache,
    encode_svg_content,
    resolve_size_path,
)
from .component import (
    build_catalog,
    create_matcher,
    icon_base_name,
    resolve_variant_dirs,
    run_build_catalog,
)
from .models import (
    DEFAULT_VARIANT_DIRS,
    BuildCatalogInput,
    BuildCatalogOutput,
    Declaration,
    IconCatalog,
    IconEntry,
    IconVariant,
    ResolvedVariantDirectory,
    VariantDirectory,
)
from .ports import ClassResolverPort, IconSourcePort, ThemePort

__all__ = [
    # Entry points
    "build_catalog",
    "create_matcher",
    "run_build_catalog",
    "resolve_variant_dirs",
    "icon_base_name",
    # Matcher
    "ICON_PREFIX",
    "ICON_SIZE_PATHS",
    "IconClassMatcher",
    "IconContentCache",
    "encode_svg_content",
    "resolve_size_path",
    # Models
    "DEFAULT_VARIANT_DIRS",
    "BuildCatalogInput",
    "BuildCatalogOutput",
    "Declaration",
    "IconCatalog",
    "IconEntry",
    "IconVariant",
    "ResolvedVariantDirectory",
    "VariantDirectory",
    # Ports
    "ClassResolverPort",
    "IconSourcePort",
    "ThemePort",
]
