"""
Icons component models.

Catalog entries, variant directory layout and the declaration block
emitted for a matched icon class.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType


class IconVariant(str, Enum):
    """Icon style/size family; decides the default emitted size."""

    OUTLINE = "outline"
    SOLID = "solid"
    MINI = "mini"
    MICRO = "micro"


@dataclass(frozen=True)
class VariantDirectory:
    """One icon style directory, relative to the icons root."""

    suffix: str
    relative_path: str
    variant: IconVariant


DEFAULT_VARIANT_DIRS: tuple[VariantDirectory, ...] = (
    VariantDirectory("", "24/outline", IconVariant.OUTLINE),
    VariantDirectory("-solid", "24/solid", IconVariant.SOLID),
    VariantDirectory("-mini", "20/solid", IconVariant.MINI),
    VariantDirectory("-micro", "16/solid", IconVariant.MICRO),
)


@dataclass(frozen=True)
class ResolvedVariantDirectory:
    """A variant directory with its presence checked once at build start."""

    declared: VariantDirectory
    path: Path
    present: bool

    @property
    def suffix(self) -> str:
        return self.declared.suffix

    @property
    def variant(self) -> IconVariant:
        return self.declared.variant


@dataclass(frozen=True)
class IconEntry:
    """A discoverable icon."""

    identifier: str
    source_path: Path
    variant: IconVariant


class IconCatalog(Mapping[str, IconEntry]):
    """
    Read-only mapping from icon identifier to entry.

    Built once per configuration load. An empty catalog is valid and
    simply matches nothing.
    """

    def __init__(self, entries: Mapping[str, IconEntry] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    def __getitem__(self, identifier: str) -> IconEntry:
        return self._entries[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IconCatalog):
            return dict(self._entries) == dict(other._entries)
        return NotImplemented

    def __repr__(self) -> str:
        return f"IconCatalog({len(self)} icons)"


@dataclass(frozen=True)
class Declaration:
    """Ordered CSS declaration block."""

    properties: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    def get(self, name: str) -> str | None:
        for prop, value in self.properties:
            if prop == name:
                return value
        return None

    def render(self) -> str:
        """Render as `prop: value; ...` without braces."""
        return "; ".join(f"{prop}: {value}" for prop, value in self.properties)


@dataclass(frozen=True)
class BuildCatalogInput:
    """Input for building the icon catalog."""

    root_dir: Path
    variant_dirs: tuple[VariantDirectory, ...] = DEFAULT_VARIANT_DIRS


@dataclass(frozen=True)
class BuildCatalogOutput:
    """Output from building the icon catalog."""

    catalog: IconCatalog
    directories: tuple[ResolvedVariantDirectory, ...] = ()
    root_present: bool = True
    warnings: list[str] = field(default_factory=list)
