"""
Stylesheet component - Builds CSS from class tokens found in source files.
"""

from ._impl import Theme, escape_class, extract_tokens, selectors_for, split_variant
from .component import collect_tokens, resolve_token, run_build_stylesheet
from .models import BuildStylesheetInput, BuildStylesheetOutput, CssRule
from .ports import ContentSourcePort, OutputWriterPort

__all__ = [
    # Entry points
    "run_build_stylesheet",
    "collect_tokens",
    "resolve_token",
    # Helpers
    "Theme",
    "escape_class",
    "extract_tokens",
    "selectors_for",
    "split_variant",
    # Models
    "BuildStylesheetInput",
    "BuildStylesheetOutput",
    "CssRule",
    # Ports
    "ContentSourcePort",
    "OutputWriterPort",
]
