import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.components.icons import DEFAULT_VARIANT_DIRS, ICON_SIZE_PATHS, IconVariant, VariantDirectory

HEX_COLOR_PATTERN = re.compile(r"^#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")

DEFAULT_ICONS_ROOT = "../deps/heroicons/optimized"

DEFAULT_COLORS: dict[str, Any] = {
    "brand": "#3957EA",
    "warning": "#F9AA00",
    "danger": "#E5243C",
    "info": "#048AF7",
    "success": "#41B658",
    "brand-secondary": "#1F37AD",
    "background-primary": "#F2F3FA",
    "background-secondary": "#FAFAFF",
    "focus-shadow": "#E9EDFD",
    "gray-primary": "#656A81",
    "pale-green": "#EFFFF5",
    "pale-blue": "#E7FFFE",
    "brand-teal": "#007494",
    "brand-green": "#8FE98F",
    "gray": {
        "100": "#fafaff",
        "200": "#dadce7",
        "300": "#dee2e6",
        "400": "#ced4da",
        "500": "#adb5bd",
        "600": "#868e96",
        "700": "#455460",
        "800": "#414159",
        "900": "#212529",
    },
}

# rem values on a 4px base unit
DEFAULT_SPACING: dict[str, str] = {
    "0": "0px",
    "px": "1px",
    "0.5": "0.125rem",
    "1": "0.25rem",
    "2": "0.5rem",
    "3": "0.75rem",
    "4": "1rem",
    "5": "1.25rem",
    "6": "1.5rem",
    "8": "2rem",
    "10": "2.5rem",
    "12": "3rem",
    "16": "4rem",
}

# LiveView adds these classes while an event is in flight
DEFAULT_VARIANTS: dict[str, list[str]] = {
    "phx-click-loading": [".phx-click-loading&", ".phx-click-loading &"],
    "phx-submit-loading": [".phx-submit-loading&", ".phx-submit-loading &"],
    "phx-change-loading": [".phx-change-loading&", ".phx-change-loading &"],
}


def _stringify_keys(value: Any) -> Any:
    # YAML reads `100:` as an int key
    if isinstance(value, dict):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    return value


class IconDirRule(BaseModel):
    model_config = ConfigDict(extra="forbid")

    suffix: str
    path: str
    variant: IconVariant


class IconsRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    root_path: str = DEFAULT_ICONS_ROOT
    prefix: str = "hero-"
    variant_dirs: list[IconDirRule] = Field(
        default_factory=lambda: [
            IconDirRule(suffix=d.suffix, path=d.relative_path, variant=d.variant) for d in DEFAULT_VARIANT_DIRS
        ]
    )

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, value: str) -> str:
        if not value or not value.endswith("-"):
            raise ValueError("icon prefix must be non-empty and end with '-'")
        return value

    def to_variant_dirs(self) -> tuple[VariantDirectory, ...]:
        return tuple(VariantDirectory(d.suffix, d.path, d.variant) for d in self.variant_dirs)


class CssRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: list[str] = Field(default_factory=lambda: ["./js/**/*.js", "../lib/**/*.*ex"])
    output: str = "../priv/static/assets/app.css"
    colors: dict[str, str | dict[str, str]] = Field(default_factory=lambda: _stringify_keys(DEFAULT_COLORS))
    spacing: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SPACING))
    variants: dict[str, list[str]] = Field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_VARIANTS.items()})
    icons: IconsRules = Field(default_factory=IconsRules)

    @field_validator("colors", "spacing", mode="before")
    @classmethod
    def stringify_keys(cls, value: Any) -> Any:
        return _stringify_keys(value)

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, value: dict[str, str | dict[str, str]]) -> dict[str, str | dict[str, str]]:
        for name, color in value.items():
            shades = color if isinstance(color, dict) else {"": color}
            for shade, hex_color in shades.items():
                if not HEX_COLOR_PATTERN.match(hex_color):
                    label = f"{name}.{shade}" if shade else name
                    raise ValueError(f"Invalid hex color for '{label}': {hex_color}. Expected #RGB or #RRGGBB")
        return value

    @field_validator("spacing")
    @classmethod
    def validate_spacing(cls, value: dict[str, str]) -> dict[str, str]:
        # Icon sizes resolve against the spacing scale
        missing = [path.partition(".")[2] for path in ICON_SIZE_PATHS if path.partition(".")[2] not in value]
        if missing:
            raise ValueError(f"Spacing scale is missing icon sizes: {', '.join(missing)}")
        return value

    @field_validator("variants")
    @classmethod
    def validate_variants(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        for name, selectors in value.items():
            if not selectors:
                raise ValueError(f"Variant '{name}' needs at least one selector")
            for selector in selectors:
                if "&" not in selector:
                    raise ValueError(f"Variant '{name}' selector must contain '&': {selector}")
        return value


class BundlerRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entry_points: list[str] = Field(default_factory=lambda: ["js/app.js"], min_length=1)
    outdir: str = "../priv/static/assets"
    bundle: bool = True
    target: str = "es2017"
    external: list[str] = Field(default_factory=lambda: ["*.css", "fonts/*", "images/*"])
    loader: dict[str, str] = Field(default_factory=dict)
    log_level: Literal["verbose", "debug", "info", "warning", "error", "silent"] = "info"
    esbuild_path: str = "esbuild"

    @field_validator("loader")
    @classmethod
    def validate_loader(cls, value: dict[str, str]) -> dict[str, str]:
        for ext in value:
            if not ext.startswith("."):
                raise ValueError(f"Loader extension must start with '.': {ext}")
        return value


class AssetsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    css: CssRules = Field(default_factory=CssRules)
    bundler: BundlerRules = Field(default_factory=BundlerRules)
    # Directory relative paths resolve against; set by the loader
    base_dir: Path = Path(".")

    def resolve(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.base_dir / candidate

    @property
    def icons_root(self) -> Path:
        return self.resolve(self.css.icons.root_path)

    @property
    def css_output(self) -> Path:
        return self.resolve(self.css.output)


class ConfigOptions(BaseModel):
    """Caller overrides applied after loading."""

    icons_root_path: str | None = None
