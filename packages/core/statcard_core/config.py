"""Card settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from statcard_renderer import AssetLibrary, FontSet, Palette
from statcard_renderer.layout import DEFAULT_CREDIT, DEFAULT_ICON_THEME


CONFIG_VERSION = 2
DEFAULT_FONT = "10014.ttf"


@dataclass(frozen=True)
class PathsConfig:
    assets: str = "./png"
    fonts: str = "./fonts"


@dataclass(frozen=True)
class FontsConfig:
    profile: str = DEFAULT_FONT
    data: str = DEFAULT_FONT
    sign: str = DEFAULT_FONT
    time: str = DEFAULT_FONT
    arrow: str = DEFAULT_FONT
    name: str = DEFAULT_FONT


@dataclass(frozen=True)
class PaletteConfig:
    arrow_up: str = "#000000"
    arrow_down: str = "#000000"
    time: str = "#000000"


@dataclass(frozen=True)
class RenderConfig:
    icon_theme: str = DEFAULT_ICON_THEME
    credit: str = DEFAULT_CREDIT
    quality: int = 100


@dataclass(frozen=True)
class CardConfig:
    """Process-wide settings; built once and only read afterwards."""

    config_version: int = CONFIG_VERSION
    paths: PathsConfig = field(default_factory=PathsConfig)
    fonts: FontsConfig = field(default_factory=FontsConfig)
    palette: PaletteConfig = field(default_factory=PaletteConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @property
    def asset_root(self) -> Path:
        return Path(self.paths.assets).expanduser()

    @property
    def font_root(self) -> Path:
        return Path(self.paths.fonts).expanduser()

    def asset_library(self) -> AssetLibrary:
        return AssetLibrary(root=self.asset_root, icon_theme=self.render.icon_theme)

    def font_set(self) -> FontSet:
        root = self.font_root
        return FontSet(**{f.name: str(root / getattr(self.fonts, f.name)) for f in fields(FontsConfig)})

    def color_palette(self) -> Palette:
        return Palette(arrow_up=self.palette.arrow_up, arrow_down=self.palette.arrow_down, time=self.palette.time)


DEFAULT_CONFIG = CardConfig()


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "StatCard" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "StatCard" / "config.json"
    return Path.home() / ".config" / "statcard" / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    known = {f.name for f in fields(dataclass_type)}
    return dataclass_type(**{k: v for k, v in (raw or {}).items() if k in known})


def _strip_slash(name: str) -> str:
    return str(name).lstrip("/\\")


def _normalize(cfg: CardConfig) -> CardConfig:
    fonts = FontsConfig(**{f.name: _strip_slash(getattr(cfg.fonts, f.name)) for f in fields(FontsConfig)})
    render = replace(cfg.render, quality=max(1, min(100, int(cfg.render.quality))))
    return replace(cfg, fonts=fonts, render=render)


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 stored flat "png"/"font" roots and a "font_set" table.
        paths = dict(data.get("paths", {}) or {})
        if "png" in data:
            paths.setdefault("assets", data.pop("png"))
        if "font" in data:
            paths.setdefault("fonts", data.pop("font"))
        data["paths"] = paths
        if "font_set" in data:
            data.setdefault("fonts", data.pop("font_set"))
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> CardConfig:
    path = path or config_path()
    if not path.exists():
        return CardConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return CardConfig()
    if not isinstance(raw, dict):
        return CardConfig()

    data = _migrate(raw)
    cfg = CardConfig(
        config_version=CONFIG_VERSION,
        paths=_merge(PathsConfig, data.get("paths", {})),
        fonts=_merge(FontsConfig, data.get("fonts", {})),
        palette=_merge(PaletteConfig, data.get("palette", {})),
        render=_merge(RenderConfig, data.get("render", {})),
    )
    return _normalize(cfg)


def save_config(cfg: CardConfig, path: Path | None = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def with_overrides(cfg: CardConfig, assets: str | None = None, fonts: str | None = None) -> CardConfig:
    paths = replace(
        cfg.paths,
        assets=assets if assets is not None else cfg.paths.assets,
        fonts=fonts if fonts is not None else cfg.paths.fonts,
    )
    return replace(cfg, paths=paths)
