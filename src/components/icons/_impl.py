"""
Icon class matcher implementation.

Turns `hero-<identifier>` class tokens into an inlined, masked SVG
declaration block.

Key behaviors:
- Unknown tokens are declined, never raised
- Icon content is read once per build and cached on the matcher
- Size comes from a static suffix table resolved against the theme
- Output is a pure function of (identifier, file content, theme)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from urllib.parse import quote

from src.core.errors import IconSourceUnreadableError

from .models import Declaration, IconCatalog
from .ports import IconSourcePort, ThemePort

logger = logging.getLogger(__name__)

ICON_PREFIX = "hero-"

DEFAULT_SIZE_PATH = "spacing.6"

# Checked in order; first matching suffix wins.
SIZE_PATH_BY_SUFFIX: tuple[tuple[str, str], ...] = (
    ("-mini", "spacing.5"),
    ("-micro", "spacing.4"),
)

# Every theme path the matcher may look up
ICON_SIZE_PATHS: tuple[str, ...] = (DEFAULT_SIZE_PATH, *(path for _, path in SIZE_PATH_BY_SUFFIX))

LINE_BREAK_RE = re.compile(r"\r?\n|\r")

# Characters left readable inside url('data:image/svg+xml;utf8,...').
# `#`, `%`, `'`, `<`, `>` and non-ASCII are always escaped.
SVG_URI_SAFE = " !\"$&()*+,/:;=?@[]^`{|}"


def encode_svg_content(raw: str) -> str:
    """Strip line breaks and percent-encode SVG markup for a data URI."""
    return quote(LINE_BREAK_RE.sub("", raw), safe=SVG_URI_SAFE)


def resolve_size_path(identifier: str) -> str:
    """Return the theme spacing path used for an icon identifier."""
    for suffix, path in SIZE_PATH_BY_SUFFIX:
        if identifier.endswith(suffix):
            return path
    return DEFAULT_SIZE_PATH


class IconContentCache:
    """
    Encoded icon content, keyed by identifier.

    Owned by one matcher for one build and discarded with it.
    """

    def __init__(self) -> None:
        self._content: dict[str, str] = {}
        self.reads = 0

    def get_or_load(self, identifier: str, path: Path, source: IconSourcePort) -> str:
        cached = self._content.get(identifier)
        if cached is not None:
            return cached

        try:
            raw = source.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise IconSourceUnreadableError(identifier, path, str(e)) from e

        self.reads += 1
        encoded = encode_svg_content(raw)
        self._content[identifier] = encoded
        return encoded

    def __len__(self) -> int:
        return len(self._content)


class IconClassMatcher:
    """
    Class resolver for icon component tokens.

    Implements ClassResolverPort. Construct one per build.
    """

    def __init__(
        self,
        catalog: IconCatalog,
        theme: ThemePort,
        source: IconSourcePort,
        prefix: str = ICON_PREFIX,
        cache: IconContentCache | None = None,
    ) -> None:
        self._catalog = catalog
        self._theme = theme
        self._source = source
        self._prefix = prefix
        self._property_prefix = prefix.rstrip("-")
        self.cache = cache if cache is not None else IconContentCache()

    @property
    def prefix(self) -> str:
        return self._prefix

    def try_resolve(self, token: str) -> Declaration | None:
        if not token.startswith(self._prefix):
            return None

        identifier = token[len(self._prefix):]
        entry = self._catalog.get(identifier)
        if entry is None:
            return None

        content = self.cache.get_or_load(identifier, entry.source_path, self._source)
        size = self._theme.lookup(resolve_size_path(identifier))
        var_name = f"--{self._property_prefix}-{identifier}"

        logger.debug("Resolved icon %s (%s) at %s", identifier, entry.variant.value, size)

        return Declaration(
            properties=(
                (var_name, f"url('data:image/svg+xml;utf8,{content}')"),
                ("-webkit-mask", f"var({var_name})"),
                ("mask", f"var({var_name})"),
                ("mask-repeat", "no-repeat"),
                ("background-color", "currentColor"),
                ("vertical-align", "middle"),
                ("display", "inline-block"),
                ("width", size),
                ("height", size),
            )
        )
