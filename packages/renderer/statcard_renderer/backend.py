"""Pillow-backed raster canvas used to compose stat cards."""

from __future__ import annotations

import logging
import os
import random
import tempfile
from pathlib import Path
from typing import Callable

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont, UnidentifiedImageError

from .errors import AssetError, EncodeError
from .models import Alignment, Gravity, Placement, TextStyle


logger = logging.getLogger("statcard.renderer")

FontLoader = Callable[[str, float], ImageFont.FreeTypeFont]

HASH_SIZE = 16
_HASH_SAMPLE = HASH_SIZE * 4
_ALPHA_LESS_FORMATS = {"JPEG", "BMP", "PPM"}

_HORIZONTAL = {Alignment.LEFT: "l", Alignment.CENTER: "m", Alignment.RIGHT: "r"}
_GRAVITY_HORIZONTAL = {
    Gravity.NORTH_WEST: "l",
    Gravity.WEST: "l",
    Gravity.SOUTH_WEST: "l",
    Gravity.NORTH: "m",
    Gravity.CENTER: "m",
    Gravity.SOUTH: "m",
    Gravity.NORTH_EAST: "r",
    Gravity.EAST: "r",
    Gravity.SOUTH_EAST: "r",
}
_GRAVITY_VERTICAL = {
    Gravity.NORTH_WEST: "a",
    Gravity.NORTH: "a",
    Gravity.NORTH_EAST: "a",
    Gravity.WEST: "m",
    Gravity.CENTER: "m",
    Gravity.EAST: "m",
    Gravity.SOUTH_WEST: "d",
    Gravity.SOUTH: "d",
    Gravity.SOUTH_EAST: "d",
}


def text_anchor(style: TextStyle) -> str:
    """Pillow anchor for a style; no gravity means (x, y) is the left baseline."""
    horizontal = _HORIZONTAL.get(style.alignment) or _GRAVITY_HORIZONTAL.get(style.gravity, "l")
    vertical = _GRAVITY_VERTICAL.get(style.gravity, "s")
    return horizontal + vertical


def _pillow_align(style: TextStyle) -> str:
    return {Alignment.CENTER: "center", Alignment.RIGHT: "right"}.get(style.alignment, "left")


def load_truetype(reference: str, size: float):
    return ImageFont.truetype(reference, size)


def _dct_matrix(n: int) -> np.ndarray:
    k = np.arange(n).reshape(-1, 1)
    i = np.arange(n).reshape(1, -1)
    return np.cos(np.pi * (2 * i + 1) * k / (2 * n))


def perceptual_hash(image: Image.Image) -> str:
    """DCT perceptual hash as a hex string of HASH_SIZE**2 / 4 characters."""
    gray = image.convert("L").resize((_HASH_SAMPLE, _HASH_SAMPLE), resample=Image.Resampling.LANCZOS)
    pixels = np.asarray(gray, dtype=np.float64)
    dct = _dct_matrix(_HASH_SAMPLE)
    coeffs = (dct @ pixels @ dct.T)[:HASH_SIZE, :HASH_SIZE]
    bits = (coeffs > np.median(coeffs)).astype(np.uint8).reshape(-1)
    nibbles = bits.reshape(-1, 4) @ np.array([8, 4, 2, 1], dtype=np.uint8)
    return "".join(f"{int(v):x}" for v in nibbles)


class RenderedImage:
    """A canvas plus its cached perceptual hash."""

    def __init__(self, image: Image.Image, font_loader: FontLoader = load_truetype) -> None:
        self._image = image if image.mode == "RGBA" else image.convert("RGBA")
        self._font_loader = font_loader
        self._hash: str | None = None

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def _mutated(self) -> None:
        self._hash = None

    def draw_image(self, path: Path, placement: Placement) -> None:
        overlay = _open_asset(path)
        if placement.size is not None:
            overlay = overlay.resize(placement.size, resample=Image.Resampling.LANCZOS)
        self.composite(overlay, placement.x, placement.y)

    def composite(self, overlay: Image.Image, x: int, y: int) -> None:
        if overlay.mode != "RGBA":
            overlay = overlay.convert("RGBA")
        self._image.alpha_composite(overlay, dest=(int(x), int(y)))
        self._mutated()

    def draw_text(self, text: str, placement: Placement, style: TextStyle) -> None:
        try:
            font = self._font_loader(style.font_reference, style.point_size)
        except OSError as exc:
            raise AssetError(style.font_reference, "unable to open font") from exc
        fill = ImageColor.getrgb(style.color)
        draw = ImageDraw.Draw(self._image)
        draw.text(
            (placement.x, placement.y),
            text,
            fill=fill,
            font=font,
            anchor=text_anchor(style),
            align=_pillow_align(style),
        )
        self._mutated()

    def crop(self, width: int, height: int, x: int, y: int) -> None:
        self._image = self._image.crop((x, y, x + width, y + height))
        self._mutated()

    def resize(self, width: int, height: int) -> None:
        self._image = self._image.resize((width, height), resample=Image.Resampling.LANCZOS)
        self._mutated()

    def rotate(self, degrees: float) -> None:
        # Counter-clockwise in Pillow; positive degrees turn clockwise here.
        self._image = self._image.rotate(-degrees, resample=Image.Resampling.BICUBIC, expand=True)
        self._mutated()

    def perceptual_hash(self) -> str:
        if self._hash is None:
            self._hash = perceptual_hash(self._image)
        return self._hash

    def random_hash(self, length: int = 16, rng: random.Random | None = None) -> str:
        full = self.perceptual_hash()
        if length >= len(full):
            return full
        start = (rng or random.Random()).randint(0, len(full) - length)
        return full[start : start + length]

    def save(self, path: Path, quality: int = 100) -> Path:
        """Encode to ``path`` via a sibling temporary file and an atomic rename."""
        path = Path(path)
        fmt = Image.registered_extensions().get(path.suffix.lower())
        if fmt is None:
            raise EncodeError(f"unsupported output format: {path}")
        image = self._image.convert("RGB") if fmt in _ALPHA_LESS_FORMATS else self._image

        tmp_path: Path | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=path.suffix, dir=path.parent)
            os.close(fd)
            tmp_path = Path(tmp_name)
            image.save(tmp_path, format=fmt, quality=quality)
            os.replace(tmp_path, path)
        except (OSError, ValueError) as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise EncodeError(f"failed to write {path}: {exc}") from exc
        logger.debug("saved %s as %s", path, fmt)
        return path


def _open_asset(path: Path) -> Image.Image:
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, UnidentifiedImageError) as exc:
        raise AssetError(path) from exc


class PillowBackend:
    def __init__(self, font_loader: FontLoader = load_truetype) -> None:
        self.font_loader = font_loader

    def create(self, width: int, height: int) -> RenderedImage:
        return RenderedImage(Image.new("RGBA", (width, height), (0, 0, 0, 0)), self.font_loader)

    def load(self, path: Path) -> RenderedImage:
        return RenderedImage(_open_asset(Path(path)), self.font_loader)
