from pathlib import Path

import pytest

HOME_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" fill="none" viewBox="0 0 24 24">\n'
    '  <path stroke="#0F172A" d="M2.25 12l8.954-8.955"/>\n'
    "</svg>\n"
)
BOLT_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 20 20"><path d="M11 1 3 11h6l-1 8 8-10h-6z"/></svg>'

ASSETS_YAML = """
css:
  content:
    - "lib/**/*.heex"
  output: "out/app.css"
  icons:
    root_path: "icons"
bundler:
  esbuild_path: "definitely-not-esbuild"
"""


def write_icon(root: Path, rel: str, content: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def icons_root(tmp_path):
    """
    Creates a heroicons-style tree:
    24/outline/home.svg, 24/solid/home.svg, 20/solid/bolt.svg, 16/solid/bolt.svg
    """
    root = tmp_path / "icons"
    write_icon(root, "24/outline/home.svg", HOME_SVG)
    write_icon(root, "24/solid/home.svg", HOME_SVG.replace('fill="none"', 'fill="currentColor"'))
    write_icon(root, "20/solid/bolt.svg", BOLT_SVG)
    write_icon(root, "16/solid/bolt.svg", BOLT_SVG)
    return root


@pytest.fixture
def project(tmp_path, icons_root):
    """
    A project directory with assets.yaml, templates using icon classes, and
    the icons tree above.
    """
    (tmp_path / "assets.yaml").write_text(ASSETS_YAML)
    templates = tmp_path / "lib" / "app_web"
    templates.mkdir(parents=True)
    (templates / "page.html.heex").write_text(
        '<button class="btn">\n'
        '  <.icon name="hero-home" class="h-5 w-5" />\n'
        '  <span class="hero-bolt-mini phx-click-loading:hero-home-solid"></span>\n'
        "  <span class=\"hero-not-an-icon text-sm\"></span>\n"
        "</button>\n"
    )
    (templates / "layout.html.heex").write_text('<div class="hero-bolt-micro"></div>\n')
    return tmp_path
