"""
Render configuration and config.yaml loading.

RenderConfig is a frozen dataclass: it is built once per renderer and never
mutated, so a single instance can be shared between renders.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml
from PIL import ImageColor

from chessimage.errors import AssetNotFound

Style = Literal["merida", "alpha", "cheq", "cburnett", "leipzig"]
STYLES: tuple[str, ...] = ("merida", "alpha", "cheq", "cburnett", "leipzig")

DEFAULT_SIZE = 480
DEFAULT_LIGHT = "rgb(240, 217, 181)"
DEFAULT_DARK = "rgb(181, 136, 99)"
DEFAULT_HIGHLIGHT = "#eb6150cc"
DEFAULT_STYLE: Style = "cburnett"
DEFAULT_ASSETS_DIR = Path(__file__).parent / "resources"


@dataclass(frozen=True)
class RenderConfig:
    size: int = DEFAULT_SIZE
    light: str = DEFAULT_LIGHT
    dark: str = DEFAULT_DARK
    highlight: str = DEFAULT_HIGHLIGHT
    style: Style = DEFAULT_STYLE
    draw_labels: bool = True
    label_light: str | None = None  # labels on light squares; defaults to `dark`
    label_dark: str | None = None   # labels on dark squares; defaults to `light`
    flipped: bool = False           # False = white at the bottom
    assets_dir: Path = field(default=DEFAULT_ASSETS_DIR)

    def __post_init__(self) -> None:
        if self.label_light is None:
            object.__setattr__(self, "label_light", self.dark)
        if self.label_dark is None:
            object.__setattr__(self, "label_dark", self.light)
        object.__setattr__(self, "assets_dir", Path(self.assets_dir))
        _validate(self)

    @property
    def cell_size(self) -> float:
        return self.size / 8

    @property
    def font_size(self) -> float:
        """Label font size in points."""
        return self.size / 8 / 10

    @property
    def text_padding(self) -> float:
        return self.font_size * 0.5

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> RenderConfig:
        """
        Build a config from loosely typed options (YAML, CLI, JSON bodies).

        Falsy values fall back to the defaults. `flipped` only counts when it
        is literally True and `draw_labels` is only cleared by a literal
        False, so a missing or null option keeps the default orientation and
        labels.
        """
        options = options or {}
        light = options.get("light") or DEFAULT_LIGHT
        dark = options.get("dark") or DEFAULT_DARK
        return cls(
            size=_parse_size(options.get("size")),
            light=light,
            dark=dark,
            highlight=options.get("highlight") or DEFAULT_HIGHLIGHT,
            style=options.get("style") or DEFAULT_STYLE,
            draw_labels=options.get("draw_labels") is not False,
            label_light=options.get("label_light") or dark,
            label_dark=options.get("label_dark") or light,
            flipped=options.get("flipped") is True,
            assets_dir=Path(options.get("assets_dir") or DEFAULT_ASSETS_DIR),
        )


@dataclass
class Config:
    render: RenderConfig
    highlights: dict[str, Any] = field(default_factory=dict)
    output: str = "board.png"

    @property
    def output_path(self) -> Path:
        return Path(self.output)


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load and validate config.yaml.

    Raises:
        FileNotFoundError: config.yaml is missing.
        ValueError: fields are absent or invalid.
        AssetNotFound: the configured piece style does not exist.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {cfg_path.resolve()}\n"
            "Copy config.example.yaml to config.yaml and adjust it."
        )

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    try:
        render_raw = dict(raw.get("render") or {})
        assets_dir = render_raw.get("assets_dir")
        if assets_dir:
            # Relative asset paths are resolved against the config file.
            render_raw["assets_dir"] = cfg_path.parent / Path(assets_dir)
        highlights_raw = raw.get("highlights") or {}
        if not isinstance(highlights_raw, Mapping):
            raise ValueError("highlights must be a mapping of square to color or true")
        return Config(
            render=RenderConfig.from_options(render_raw),
            highlights={str(sq): value for sq, value in highlights_raw.items()},
            output=str(raw.get("output") or "board.png"),
        )
    except (AttributeError, TypeError) as exc:
        raise ValueError(f"Invalid config.yaml structure: {exc}") from exc


def _parse_size(value: Any) -> Any:
    """Coerce YAML/CLI sizes to int; non-integral values are left for _validate to reject."""
    if not value:
        return DEFAULT_SIZE
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise ValueError(f"size must be a positive integer, got {value!r}") from exc
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _validate(config: RenderConfig) -> None:
    if isinstance(config.size, bool) or not isinstance(config.size, int) or config.size < 1:
        raise ValueError(f"size must be a positive integer, got {config.size!r}")
    if config.style not in STYLES:
        raise AssetNotFound(config.style)
    for name in ("light", "dark", "highlight", "label_light", "label_dark"):
        value = getattr(config, name)
        try:
            ImageColor.getrgb(value)
        except (ValueError, AttributeError) as exc:
            raise ValueError(f"{name} is not a valid color: {value!r}") from exc
