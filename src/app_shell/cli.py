import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from src.adapters.dev_watch import PollingWatcher
from src.app_shell.build import build_css, build_icon_catalog, build_js, on_css_rebuild, snapshot_mtimes
from src.components.bundler import BuildMode
from src.config.loader import load_config
from src.config.models import AssetsConfig, ConfigOptions
from src.core.errors import BuildError, ConfigError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

CONFIG_PATH = "assets.yaml"


def get_config(args: argparse.Namespace) -> AssetsConfig:
    options = ConfigOptions(
        icons_root_path=str(Path(args.icons_root).resolve()) if args.icons_root else None,
    )
    return load_config(Path(args.config), options)


def handle_css(config: AssetsConfig, args: argparse.Namespace) -> None:
    out = build_css(config)
    print(f"Generated {len(out.rules)} CSS rules -> {out.output_path}")

    if args.watch:
        watcher = PollingWatcher(
            snapshot=lambda: snapshot_mtimes(config),
            rebuild=lambda: build_css(config),
            on_rebuild=on_css_rebuild,
        )
        watcher.prime()
        try:
            watcher.run_forever()
        except KeyboardInterrupt:
            watcher.stop()


def handle_js(config: AssetsConfig, args: argparse.Namespace) -> None:
    build_js(config, BuildMode(watch=args.watch, deploy=args.deploy))


def handle_build(config: AssetsConfig, args: argparse.Namespace) -> None:
    out = build_css(config)
    print(f"Generated {len(out.rules)} CSS rules -> {out.output_path}")
    build_js(config, BuildMode(deploy=args.deploy))


def handle_icons(config: AssetsConfig, args: argparse.Namespace) -> None:
    catalog = build_icon_catalog(config).catalog
    for identifier in sorted(catalog):
        entry = catalog[identifier]
        print(f"{identifier}\t{entry.variant.value}\t{entry.source_path}")
    print(f"{len(catalog)} icons")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LiveView assets CLI")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to assets config YAML")
    parser.add_argument("--icons-root", help="Override the heroicons root directory")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # css
    css_parser = subparsers.add_parser("css", help="Build the stylesheet")
    css_parser.add_argument("--watch", action="store_true", help="Rebuild on changes")

    # js
    js_parser = subparsers.add_parser("js", help="Bundle JavaScript with esbuild")
    js_parser.add_argument("--watch", action="store_true", help="Let esbuild watch and rebuild")
    js_parser.add_argument("--deploy", action="store_true", help="Minify for deployment")

    # build
    build_parser_ = subparsers.add_parser("build", help="Build stylesheet and JavaScript")
    build_parser_.add_argument("--deploy", action="store_true", help="Minify for deployment")

    # icons
    subparsers.add_parser("icons", help="List the icon catalog")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_config(args)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except ConfigError as e:
        logger.error(str(e))
        return 1

    handlers = {
        "css": handle_css,
        "js": handle_js,
        "build": handle_build,
        "icons": handle_icons,
    }

    try:
        handlers[args.command](config, args)
    except BuildError as e:
        logger.error(f"Build failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
