"""
Stylesheet component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.components.icons import Declaration


@dataclass(frozen=True)
class CssRule:
    """One rendered rule: selectors sharing a declaration block."""

    selectors: tuple[str, ...]
    declaration: Declaration
    token: str

    def render(self) -> str:
        body = "".join(f"  {prop}: {value};\n" for prop, value in self.declaration.properties)
        return f"{', '.join(self.selectors)} {{\n{body}}}\n"


@dataclass(frozen=True)
class BuildStylesheetInput:
    """Input for building the stylesheet."""

    content_globs: tuple[str, ...]
    base_dir: Path
    output_path: Path | None = None
    variants: dict[str, tuple[str, ...]] = field(default_factory=dict)


@dataclass
class BuildStylesheetOutput:
    """Output from building the stylesheet."""

    css: str
    rules: list[CssRule] = field(default_factory=list)
    files_scanned: int = 0
    tokens_scanned: int = 0
    output_path: Path | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def matched_tokens(self) -> list[str]:
        return [rule.token for rule in self.rules]
