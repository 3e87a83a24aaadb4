"""
Stylesheet component - Class token scan and resolver dispatch.

Stands in for the host CSS engine's extension loop: every class-like token
found under the content globs is offered to each registered resolver in
turn, and the first declaration returned becomes a rule.

Invariants:
- I1: Tokens are processed in sorted order, so output is byte-stable
- I2: Resolvers may decline any token; declining is not an error
- I3: Resolver errors propagate and nothing is written
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.components.icons import ClassResolverPort

from ._impl import extract_tokens, selectors_for, split_variant
from .models import BuildStylesheetInput, BuildStylesheetOutput, CssRule
from .ports import ContentSourcePort, OutputWriterPort

logger = logging.getLogger(__name__)


def collect_tokens(inp: BuildStylesheetInput, source: ContentSourcePort) -> tuple[set[str], int, list[str]]:
    """Scan content globs. Returns (tokens, files scanned, warnings)."""
    tokens: set[str] = set()
    seen: set[str] = set()
    warnings: list[str] = []

    for pattern in inp.content_globs:
        for path in source.glob(inp.base_dir, pattern):
            key = str(path)
            if key in seen:
                continue
            seen.add(key)
            try:
                text = source.read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                message = f"Skipping unreadable content file {path}: {e}"
                logger.warning(message)
                warnings.append(message)
                continue
            tokens |= extract_tokens(text)

    return tokens, len(seen), warnings


def resolve_token(
    token: str,
    resolvers: Sequence[ClassResolverPort],
    variants: dict[str, tuple[str, ...]],
) -> CssRule | None:
    split = split_variant(token, variants)
    if split is None:
        return None

    variant, base = split
    for resolver in resolvers:
        declaration = resolver.try_resolve(base)
        if declaration is not None:
            templates = variants.get(variant) if variant else None
            return CssRule(selectors=selectors_for(token, templates), declaration=declaration, token=token)
    return None


def run_build_stylesheet(
    inp: BuildStylesheetInput,
    *,
    resolvers: Sequence[ClassResolverPort],
    source: ContentSourcePort,
    writer: OutputWriterPort | None = None,
) -> BuildStylesheetOutput:
    """
    Build the stylesheet from content files.

    Args:
        inp: Content globs, base directory, variants and output path.
        resolvers: Registered class resolvers, consulted in order.
        source: Content file access.
        writer: Output writer; required when inp.output_path is set.

    Returns:
        BuildStylesheetOutput with the rendered CSS.
    """
    tokens, files_scanned, warnings = collect_tokens(inp, source)

    rules: list[CssRule] = []
    for token in sorted(tokens):
        rule = resolve_token(token, resolvers, inp.variants)
        if rule is not None:
            rules.append(rule)

    css = "\n".join(rule.render() for rule in rules)

    output_path = None
    if inp.output_path is not None:
        if writer is None:
            raise ValueError("An output writer is required when output_path is set")
        output_path = writer.write_text(inp.output_path, css)

    logger.info(
        "Stylesheet built: %d rules from %d tokens in %d files",
        len(rules),
        len(tokens),
        files_scanned,
    )
    return BuildStylesheetOutput(
        css=css,
        rules=rules,
        files_scanned=files_scanned,
        tokens_scanned=len(tokens),
        output_path=output_path,
        warnings=warnings,
    )
