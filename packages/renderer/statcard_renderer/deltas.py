"""Signed statistic deltas rendered with direction glyphs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .formatting import abbreviate, format_count, round2
from .models import Polarity, StatSnapshot, polarity_of
from .themes import Palette


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class GlyphTable:
    up: str
    down: str

    def glyph(self, direction: Direction) -> str:
        return self.up if direction is Direction.UP else self.down


ARROWS = GlyphTable(up="↑", down="↓")
SIGNS = GlyphTable(up="+", down="-")


@dataclass(frozen=True)
class DeltaText:
    text: str
    direction: Direction
    color: str


def direction(delta: float, polarity: Polarity) -> Direction:
    # Zero has no neutral state; it always renders as UP.
    if polarity is Polarity.LOWER_IS_BETTER:
        return Direction.DOWN if delta > 0 else Direction.UP
    return Direction.DOWN if delta < 0 else Direction.UP


class DeltaFormatter:
    def __init__(self, palette: Palette | None = None) -> None:
        self.palette = palette or Palette()

    def color(self, direction_: Direction) -> str:
        return self.palette.arrow_up if direction_ is Direction.UP else self.palette.arrow_down

    def format(
        self,
        delta: float,
        polarity: Polarity,
        glyphs: GlyphTable = ARROWS,
        magnitude: Callable[[float], str] = round2,
        template: str = "{glyph}{magnitude}",
    ) -> DeltaText:
        resolved = direction(delta, polarity)
        text = template.format(glyph=glyphs.glyph(resolved), magnitude=magnitude(abs(delta)))
        return DeltaText(text=text, direction=resolved, color=self.color(resolved))


@dataclass(frozen=True)
class DeltaField:
    """How one rendered delta is computed and styled.

    ``fields`` lists the snapshot fields summed on each side; ``colored``
    selects the up/down palette color instead of the element's own color.
    """

    element: str
    fields: tuple[str, ...]
    glyphs: GlyphTable
    magnitude: Callable[[float], str]
    template: str = "{glyph}{magnitude}"
    colored: bool = True

    @property
    def polarity(self) -> Polarity:
        return polarity_of(self.fields[0])

    def delta(self, current: StatSnapshot, baseline: StatSnapshot) -> float:
        return sum(getattr(current, f) for f in self.fields) - sum(getattr(baseline, f) for f in self.fields)

    def render(self, formatter: DeltaFormatter, current: StatSnapshot, baseline: StatSnapshot) -> DeltaText:
        return formatter.format(
            self.delta(current, baseline),
            self.polarity,
            glyphs=self.glyphs,
            magnitude=self.magnitude,
            template=self.template,
        )


def _percent(value: float) -> str:
    return f"{round2(value)}%"


PP_DELTA = DeltaField("pp_delta", ("pp",), ARROWS, round2)
RANKED_SCORE_DELTA = DeltaField("ranked_score_delta", ("ranked_score",), SIGNS, abbreviate)
TOTAL_HITS_DELTA = DeltaField("total_hits_delta", ("total_hits",), SIGNS, abbreviate)
PLAY_COUNT_DELTA = DeltaField("play_count_delta", ("play_count",), SIGNS, format_count)
ACCURACY_DELTA = DeltaField("accuracy_delta", ("accuracy",), ARROWS, _percent)
LEVEL_DELTA = DeltaField("level_delta", ("level",), SIGNS, round2)

SS_DELTA = DeltaField("ss_delta", ("count_ssh", "count_ss"), ARROWS, format_count, "({glyph}{magnitude})", colored=False)
S_DELTA = DeltaField("s_delta", ("count_sh", "count_s"), ARROWS, format_count, "({glyph}{magnitude})", colored=False)
A_DELTA = DeltaField("a_delta", ("count_a",), ARROWS, format_count, "({glyph}{magnitude})", colored=False)

COUNTRY_RANK_DELTA = DeltaField(
    "country_rank_delta", ("pp_country_rank",), ARROWS, format_count, "({glyph}{magnitude})", colored=False
)
GLOBAL_RANK_DELTA = DeltaField("global_rank_delta", ("pp_rank",), ARROWS, format_count, "({glyph}{magnitude})")
