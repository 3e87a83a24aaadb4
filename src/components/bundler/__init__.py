"""
Bundler component - esbuild options and invocation.
"""

from .component import (
    on_rebuild,
    options_from_rules,
    parse_mode,
    run_bundle,
    to_esbuild_args,
)
from .models import BuildMode, BundleResult, BundlerOptions
from .ports import ProcessRunnerPort

__all__ = [
    # Entry points
    "run_bundle",
    "options_from_rules",
    "parse_mode",
    "to_esbuild_args",
    "on_rebuild",
    # Models
    "BuildMode",
    "BundleResult",
    "BundlerOptions",
    # Ports
    "ProcessRunnerPort",
]
