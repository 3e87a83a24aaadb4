from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.config.models import AssetsConfig, ConfigOptions
from src.core.errors import ConfigError

# Lists that accumulate across `extends:` instead of being replaced
MERGED_LISTS = {("css", "content")}


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Assets config not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Assets config {path} must be a mapping, got {type(data).__name__}")
    return data


def merge_config(base: dict[str, Any], override: dict[str, Any], _path: tuple[str, ...] = ()) -> dict[str, Any]:
    """Deep-merge override into base. Returns a new dict."""
    merged = dict(base)
    for key, value in override.items():
        key_path = (*_path, key)
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_config(current, value, key_path)
        elif key_path in MERGED_LISTS and isinstance(current, list) and isinstance(value, list):
            merged[key] = current + [item for item in value if item not in current]
        else:
            merged[key] = value
    return merged


def _load_raw(path: Path, seen: set[Path]) -> dict[str, Any]:
    resolved = path.resolve()
    if resolved in seen:
        raise ConfigError(f"Circular 'extends' chain at {path}")
    seen.add(resolved)

    data = _read_yaml(path)
    parent = data.pop("extends", None)
    if parent is None:
        return data

    base = _load_raw(path.parent / parent, seen)
    return merge_config(base, data)


def load_config(path: Path, options: ConfigOptions | None = None) -> AssetsConfig:
    """
    Load and validate the assets config file.
    Raises FileNotFoundError if the file (or an `extends` base) is missing.
    Raises ConfigError if syntax or schema is invalid.
    """
    path = Path(path)
    data = _load_raw(path, set())
    data.setdefault("base_dir", str(path.parent))

    try:
        config = AssetsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Assets config validation failed:\n{e}") from e

    return apply_options(config, options)


def apply_options(config: AssetsConfig, options: ConfigOptions | None) -> AssetsConfig:
    if options is None or options.icons_root_path is None:
        return config

    icons = config.css.icons.model_copy(update={"root_path": options.icons_root_path})
    css = config.css.model_copy(update={"icons": icons})
    return config.model_copy(update={"css": css})
