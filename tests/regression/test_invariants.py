"""
Build invariants that must hold across releases.
"""

from __future__ import annotations

import pytest

from src.adapters.fs.source import FileSystemIconSource
from src.app_shell.build import build_css
from src.components.icons import DEFAULT_VARIANT_DIRS, IconVariant, VariantDirectory, build_catalog
from src.config.loader import load_config

HOME_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M2 12l9-9"/></svg>'


def write_icon(root, rel, content):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def source():
    return FileSystemIconSource()


# --- R1: Catalog is a pure function of the tree ---
def test_R1_rescan_yields_equal_catalog(icons_root, source):
    """R1: Scanning the same unchanged tree twice gives equal catalogs."""
    first = build_catalog(icons_root, source=source)
    second = build_catalog(icons_root, source=source)
    assert first == second
    assert list(first) == list(second)


# --- R2: Byte-stable output ---
def test_R2_repeated_builds_identical(project):
    """R2: Two builds of an unchanged project write identical bytes."""
    config = load_config(project / "assets.yaml")
    build_css(config)
    first = config.css_output.read_bytes()
    build_css(config)
    assert config.css_output.read_bytes() == first


# --- R3: First variant directory wins ---
def test_R3_collision_keeps_earlier_directory(tmp_path, source):
    """R3: When two directories produce the same identifier, the earlier one wins."""
    write_icon(tmp_path, "a/home.svg", HOME_SVG)
    write_icon(tmp_path, "b/home.svg", HOME_SVG)
    dirs = (
        VariantDirectory("", "a", IconVariant.OUTLINE),
        VariantDirectory("", "b", IconVariant.SOLID),
    )

    catalog = build_catalog(tmp_path, dirs, source=source)

    assert catalog["home"].source_path == tmp_path / "a" / "home.svg"
    assert catalog["home"].variant is IconVariant.OUTLINE


# --- R4: Missing icons degrade ---
def test_R4_missing_root_gives_empty_catalog(tmp_path, source):
    """R4: A missing icons root yields an empty catalog, not an error."""
    catalog = build_catalog(tmp_path / "missing", DEFAULT_VARIANT_DIRS, source=source)
    assert len(catalog) == 0


def test_R4_missing_variant_dir_skipped(tmp_path, source):
    """R4: Only present variant directories contribute identifiers."""
    write_icon(tmp_path, "20/solid/bolt.svg", HOME_SVG)

    catalog = build_catalog(tmp_path, DEFAULT_VARIANT_DIRS, source=source)

    assert list(catalog) == ["bolt-mini"]


# --- R5: Non-icon tokens never match ---
def test_R5_unknown_icon_tokens_ignored(project):
    """R5: hero- tokens without a catalog entry produce no rules."""
    config = load_config(project / "assets.yaml")
    out = build_css(config, write=False)
    assert all("not-an-icon" not in token for token in out.matched_tokens)
