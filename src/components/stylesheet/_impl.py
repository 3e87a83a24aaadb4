"""
Stylesheet helpers: theme lookup, token extraction, selector escaping.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

CLASS_TOKEN_RE = re.compile(r"[A-Za-z][A-Za-z0-9_:\-/.%]*")
VALID_CLASS = re.compile(r"^[A-Za-z0-9_:\-/.%]+$")

_ESCAPES = {
    ":": "\\:",
    "/": "\\/",
    ".": "\\.",
    "%": "\\%",
}


class Theme:
    """
    Theme values addressed by dotted path (`spacing.6`, `colors.gray.100`).

    Implements ThemePort.
    """

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = values

    @classmethod
    def from_rules(cls, colors: Mapping[str, Any], spacing: Mapping[str, str]) -> Theme:
        return cls({"colors": dict(colors), "spacing": dict(spacing)})

    def lookup(self, path: str) -> str:
        section, _, key = path.partition(".")
        node: Any = self._values.get(section)
        # Spacing keys such as "0.5" contain dots; try the full key first
        if isinstance(node, Mapping) and key in node:
            node = node[key]
        else:
            for part in key.split(".") if key else []:
                if not isinstance(node, Mapping) or part not in node:
                    raise KeyError(f"Unknown theme value: {path}")
                node = node[part]
        if not isinstance(node, str):
            raise KeyError(f"Theme path does not name a value: {path}")
        return node


def escape_class(name: str) -> str:
    """Escape a class name for use in a CSS selector."""
    escaped = name
    for target, repl in _ESCAPES.items():
        escaped = escaped.replace(target, repl)
    return escaped


def extract_tokens(text: str) -> set[str]:
    """Candidate class tokens in a source file."""
    tokens = set()
    for match in CLASS_TOKEN_RE.finditer(text):
        token = match.group(0).rstrip(".:/")
        if token and VALID_CLASS.match(token):
            tokens.add(token)
    return tokens


def split_variant(token: str, variants: Iterable[str]) -> tuple[str | None, str] | None:
    """
    Split `variant:base` tokens.

    Returns (None, token) when there is no prefix, and None when the prefix
    is not a registered variant.
    """
    if ":" not in token:
        return None, token
    prefix, base = token.split(":", 1)
    if prefix not in variants or not base or ":" in base:
        return None
    return prefix, base


def selectors_for(token: str, variant_templates: Iterable[str] | None) -> tuple[str, ...]:
    class_selector = f".{escape_class(token)}"
    if not variant_templates:
        return (class_selector,)
    return tuple(template.replace("&", class_selector) for template in variant_templates)
