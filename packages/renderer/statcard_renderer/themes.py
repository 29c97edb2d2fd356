"""Fixed card palette, font roles and text sizes."""

from __future__ import annotations

from dataclasses import dataclass


BIG_POINT_SIZE = 54.0
MID_POINT_SIZE = 43.0
SMALL_POINT_SIZE = 29.0


@dataclass(frozen=True)
class Palette:
    arrow_up: str = "#000000"
    arrow_down: str = "#000000"
    time: str = "#000000"


@dataclass(frozen=True)
class FontSet:
    """Resolved font references per text role."""

    profile: str
    data: str
    sign: str
    time: str
    arrow: str
    name: str

    @classmethod
    def uniform(cls, reference: str) -> "FontSet":
        return cls(
            profile=reference,
            data=reference,
            sign=reference,
            time=reference,
            arrow=reference,
            name=reference,
        )
