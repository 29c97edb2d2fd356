"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

from .errors import InvalidRequestError


CANVAS_WIDTH = 1080
CANVAS_HEIGHT = 1920
NO_BASELINE_USER_ID = -1
MODE_COUNT = 4


class Gravity(str, Enum):
    NONE = "None"
    NORTH_WEST = "NorthWest"
    NORTH = "North"
    NORTH_EAST = "NorthEast"
    WEST = "West"
    CENTER = "Center"
    EAST = "East"
    SOUTH_WEST = "SouthWest"
    SOUTH = "South"
    SOUTH_EAST = "SouthEast"


class Alignment(str, Enum):
    NONE = "None"
    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"


class Polarity(str, Enum):
    HIGHER_IS_BETTER = "HigherIsBetter"
    LOWER_IS_BETTER = "LowerIsBetter"


@dataclass(frozen=True)
class TextStyle:
    color: str = "black"
    point_size: float = 12.0
    font_reference: str = "monospace"
    gravity: Gravity = Gravity.NONE
    alignment: Alignment = Alignment.NONE


@dataclass(frozen=True)
class Placement:
    x: int
    y: int
    width: int | None = None
    height: int | None = None

    def __post_init__(self) -> None:
        if (self.width is None) != (self.height is None):
            raise ValueError("Placement width and height must both be set or both be omitted")

    @property
    def resizes(self) -> bool:
        return self.width is not None and self.height is not None

    @property
    def size(self) -> tuple[int, int] | None:
        if not self.resizes:
            return None
        return (int(self.width), int(self.height))  # type: ignore[arg-type]


def _stat(polarity: Polarity, default: int | float = 0):
    return field(default=default, metadata={"polarity": polarity})


@dataclass(frozen=True)
class StatSnapshot:
    """One user's statistics at a point in time.

    Every field declares whether a numeric increase is an improvement;
    rank positions are the only fields where smaller is better.
    """

    ranked_score: int = _stat(Polarity.HIGHER_IS_BETTER)
    total_score: int = _stat(Polarity.HIGHER_IS_BETTER)
    total_hits: int = _stat(Polarity.HIGHER_IS_BETTER)
    play_count: int = _stat(Polarity.HIGHER_IS_BETTER)
    pp: float = _stat(Polarity.HIGHER_IS_BETTER, 0.0)
    level: float = _stat(Polarity.HIGHER_IS_BETTER, 0.0)
    accuracy: float = _stat(Polarity.HIGHER_IS_BETTER, 0.0)
    pp_rank: int = _stat(Polarity.LOWER_IS_BETTER)
    pp_country_rank: int = _stat(Polarity.LOWER_IS_BETTER)
    count_ss: int = _stat(Polarity.HIGHER_IS_BETTER)
    count_ssh: int = _stat(Polarity.HIGHER_IS_BETTER)
    count_s: int = _stat(Polarity.HIGHER_IS_BETTER)
    count_sh: int = _stat(Polarity.HIGHER_IS_BETTER)
    count_a: int = _stat(Polarity.HIGHER_IS_BETTER)


def polarity_of(field_name: str) -> Polarity:
    for f in fields(StatSnapshot):
        if f.name == field_name:
            return f.metadata["polarity"]
    raise KeyError(f"Unknown statistic: {field_name}")


@dataclass(frozen=True)
class HitCounts:
    count300: int = 0
    count100: int = 0
    count50: int = 0

    @property
    def total(self) -> int:
        return self.count300 + self.count100 + self.count50


@dataclass(frozen=True)
class CardRequest:
    data_color: str
    profile_color: str
    sign_color: str
    mode: int
    user_id: int
    country: str
    username: str
    contact_id: str
    signature: str
    background: str
    profile_frame: str
    data_frame: str
    sign_frame: str
    opacity: int
    current: StatSnapshot
    baseline: StatSnapshot
    output_path: Path
    day_offset: int = 0
    hits: HitCounts = field(default_factory=HitCounts)
    total_seconds_played: int = 0

    @property
    def has_baseline(self) -> bool:
        return self.user_id != NO_BASELINE_USER_ID

    def validate(self) -> None:
        if not 0 <= self.mode < MODE_COUNT:
            raise InvalidRequestError(f"mode must be in [0, {MODE_COUNT - 1}], got {self.mode}")
        if self.day_offset < 0:
            raise InvalidRequestError(f"day offset must not be negative, got {self.day_offset}")
        if self.opacity < 0:
            raise InvalidRequestError(f"opacity level must not be negative, got {self.opacity}")
        if not str(self.output_path).strip():
            raise InvalidRequestError("output path is empty")
