"""Fixed stat card template: every asset and text field at a literal position."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Callable, Union

from .deltas import (
    A_DELTA,
    ACCURACY_DELTA,
    COUNTRY_RANK_DELTA,
    GLOBAL_RANK_DELTA,
    LEVEL_DELTA,
    PLAY_COUNT_DELTA,
    PP_DELTA,
    RANKED_SCORE_DELTA,
    S_DELTA,
    SS_DELTA,
    TOTAL_HITS_DELTA,
    DeltaField,
    DeltaFormatter,
)
from .formatting import abbreviate, format_count, round2
from .models import Alignment, CardRequest, Gravity, Placement, TextStyle
from .themes import BIG_POINT_SIZE, MID_POINT_SIZE, SMALL_POINT_SIZE, FontSet, Palette


DEFAULT_ICON_THEME = "sakura miku"
DEFAULT_CREDIT = "by statcard with Python & Pillow"
UNKNOWN_COUNTRY = "__"
TIMESTAMP_FORMAT = "%Y-%m-%d %a %H:%M:%S"

MODE_ICONS = (
    "mode-osu-med.png",
    "mode-taiko-med.png",
    "mode-fruits-med.png",
    "mode-mania-med.png",
)
RANK_ICONS = (
    "ranking-X-small.png",
    "ranking-XH-small.png",
    "ranking-S-small.png",
    "ranking-SH-small.png",
    "ranking-A-small.png",
)

FULL_CANVAS = Placement(0, 0)
PROFILE_FRAME = Placement(50, 20, 970, 600)
# Cascading rows: (56 + 33.5 * i, 980 + 140 * i) truncated to whole pixels.
DATA_FRAMES = (
    Placement(56, 980, 820, 140),
    Placement(89, 1120, 820, 140),
    Placement(123, 1260, 820, 140),
    Placement(156, 1400, 820, 140),
    Placement(190, 1540, 820, 140),
    Placement(223, 1680, 820, 140),
)
SIGN_FRAME = Placement(125, 570, 825, 150)
AVATAR = Placement(165, 150, 350, 350)
MODE_ICON = Placement(165, 150, 80, 80)
GLOBE_ICON = Placement(510, 150, 100, 100)
COUNTRY_FLAG = Placement(560, 425, 80, 80)
# Zig-zag: even index on the upper row, odd index on the lower row.
RANK_ICON_SLOTS = (
    Placement(165, 720, 82, 98),
    Placement(285, 870, 82, 98),
    Placement(405, 720, 82, 98),
    Placement(525, 870, 82, 98),
    Placement(645, 720, 82, 98),
)
RANK_COUNT_SLOTS = (
    Placement(253, 790),
    Placement(373, 940),
    Placement(493, 790),
    Placement(613, 940),
    Placement(733, 790),
)

TEXT_SLOTS: dict[str, Placement] = {
    "day_notice": Placement(30, 1840),
    "timestamp": Placement(30, 1880),
    "user_id": Placement(585, 365),
    "contact_id": Placement(585, 395),
    "country_rank": Placement(660, 460),
    "pp": Placement(140, 1210),
    "ranked_score": Placement(106, 1070),
    "total_hits": Placement(240, 1630),
    "play_count": Placement(173, 1350),
    "level": Placement(274, 1770),
    "accuracy": Placement(207, 1490),
    "pp_delta": Placement(670, 1210),
    "ranked_score_delta": Placement(626, 1070),
    "total_hits_delta": Placement(780, 1630),
    "play_count_delta": Placement(713, 1350),
    "accuracy_delta": Placement(747, 1490),
    "level_delta": Placement(814, 1770),
    "ss_delta": Placement(253, 860),
    "s_delta": Placement(494, 860),
    "a_delta": Placement(735, 860),
    "global_rank_delta": Placement(660, 270),
    "global_rank": Placement(600, 220),
    "username": Placement(555, 325),
    "signature": Placement(540, 660),
}

STAT_DELTAS: tuple[DeltaField, ...] = (
    PP_DELTA,
    RANKED_SCORE_DELTA,
    TOTAL_HITS_DELTA,
    PLAY_COUNT_DELTA,
    ACCURACY_DELTA,
    LEVEL_DELTA,
)
TIER_DELTAS: tuple[DeltaField, ...] = (SS_DELTA, S_DELTA, A_DELTA)


@dataclass(frozen=True)
class AssetLibrary:
    """Resolves theme selections to files under the asset root."""

    root: Path
    icon_theme: str = DEFAULT_ICON_THEME

    def background(self, name: str) -> Path:
        return self.root / "stat" / f"{name}.png"

    def overlay(self, level: int) -> Path:
        return self.root / f"fx{level}.png"

    def frame(self, name: str) -> Path:
        return self.root / "tk" / f"{name}.png"

    def avatar(self, user_id: int) -> Path:
        return self.root / "avatars" / f"{user_id}.png"

    def default_avatar(self) -> Path:
        return self.root / "no-avatar.png"

    def icon(self, filename: str) -> Path:
        return self.root / "rank" / self.icon_theme / filename

    def globe(self) -> Path:
        return self.root / "world" / "s.png"

    def flag(self, country: str) -> Path:
        return self.root / "country" / f"{country or UNKNOWN_COUNTRY}.png"


@dataclass(frozen=True)
class ImageOp:
    element: str
    path: Path
    placement: Placement
    fallback: Path | None = None


@dataclass(frozen=True)
class TextOp:
    element: str
    text: str
    placement: Placement
    style: TextStyle


DrawOp = Union[ImageOp, TextOp]


class LayoutEngine:
    """Builds the ordered draw plan for one card."""

    def __init__(
        self,
        assets: AssetLibrary,
        fonts: FontSet,
        palette: Palette | None = None,
        credit: str = DEFAULT_CREDIT,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.assets = assets
        self.fonts = fonts
        self.palette = palette or Palette()
        self.credit = credit
        self.clock = clock or datetime.now
        self.deltas = DeltaFormatter(self.palette)

    def plan(self, request: CardRequest) -> list[DrawOp]:
        ops: list[DrawOp] = []
        ops.extend(self._frames(request))
        ops.extend(self._icons(request))
        ops.extend(self._profile_text(request))
        ops.extend(self._data_text(request))
        ops.extend(self._rank_text(request))
        return ops

    def _frames(self, request: CardRequest) -> list[DrawOp]:
        a = self.assets
        ops: list[DrawOp] = [
            ImageOp("background", a.background(request.background), FULL_CANVAS),
            ImageOp("overlay", a.overlay(request.opacity), FULL_CANVAS),
            ImageOp("profile_frame", a.frame(request.profile_frame), PROFILE_FRAME),
        ]
        ops.extend(ImageOp("data_frame", a.frame(request.data_frame), p) for p in DATA_FRAMES)
        ops.append(ImageOp("sign_frame", a.frame(request.sign_frame), SIGN_FRAME))
        return ops

    def _icons(self, request: CardRequest) -> list[DrawOp]:
        a = self.assets
        ops: list[DrawOp] = [
            ImageOp("avatar", a.avatar(request.user_id), AVATAR, fallback=a.default_avatar()),
            ImageOp("mode_icon", a.icon(MODE_ICONS[request.mode]), MODE_ICON),
            ImageOp("globe_icon", a.globe(), GLOBE_ICON),
            ImageOp("country_flag", a.flag(request.country), COUNTRY_FLAG),
        ]
        ops.extend(ImageOp("rank_icon", a.icon(name), slot) for name, slot in zip(RANK_ICONS, RANK_ICON_SLOTS))
        return ops

    def _profile_text(self, request: CardRequest) -> list[DrawOp]:
        ops: list[DrawOp] = []
        time_style = TextStyle(color=self.palette.time, point_size=SMALL_POINT_SIZE, font_reference=self.fonts.time)
        if request.day_offset != 0:
            ops.append(self._text("day_notice", f"compare with {request.day_offset} days ago", time_style))
        stamp = self.clock().strftime(TIMESTAMP_FORMAT)
        ops.append(self._text("timestamp", f"{stamp} {self.credit}".rstrip(), time_style))

        profile = TextStyle(
            color=request.profile_color,
            point_size=SMALL_POINT_SIZE,
            font_reference=self.fonts.profile,
        )
        ops.append(self._text("user_id", f"UID: {request.user_id}", profile))
        ops.append(self._text("contact_id", f"QQ: {request.contact_id}", profile))

        rank = f"#{format_count(request.current.pp_country_rank)}"
        if request.has_baseline:
            rank += COUNTRY_RANK_DELTA.render(self.deltas, request.current, request.baseline).text
        ops.append(self._text("country_rank", rank, profile))
        return ops

    def _data_text(self, request: CardRequest) -> list[DrawOp]:
        cur = request.current
        data = TextStyle(color=request.data_color, point_size=MID_POINT_SIZE, font_reference=self.fonts.data)
        ops: list[DrawOp] = [
            self._text("pp", f"PPoint :     {round2(cur.pp)}", data),
            self._text("ranked_score", f"Ranked Score : {abbreviate(cur.ranked_score)}", data),
            self._text("total_hits", f"Total Hits :    {abbreviate(cur.total_hits)}", data),
            self._text("play_count", f"Playcount :    {format_count(cur.play_count)}", data),
            self._text("level", f"Current Level :   {round2(cur.level)}", data),
            self._text("accuracy", f"Hit Accuracy : {round2(cur.accuracy)}%", data),
        ]
        if not request.has_baseline:
            return ops

        for field in STAT_DELTAS:
            ops.append(self._delta(field, request, data))
        tiers = TextStyle(color=request.profile_color, point_size=BIG_POINT_SIZE, font_reference=self.fonts.name)
        for field in TIER_DELTAS:
            ops.append(self._delta(field, request, tiers))
        return ops

    def _rank_text(self, request: CardRequest) -> list[DrawOp]:
        cur = request.current
        name = TextStyle(color=request.profile_color, point_size=BIG_POINT_SIZE, font_reference=self.fonts.name)
        counts = (cur.count_ss, cur.count_ssh, cur.count_s, cur.count_sh, cur.count_a)
        ops: list[DrawOp] = [
            TextOp("rank_count", format_count(n), slot, name) for n, slot in zip(counts, RANK_COUNT_SLOTS)
        ]
        if request.has_baseline:
            arrow = replace(name, font_reference=self.fonts.arrow)
            ops.append(self._delta(GLOBAL_RANK_DELTA, request, arrow))
        ops.append(self._text("global_rank", format_count(cur.pp_rank), name))
        ops.append(self._text("username", request.username, name))

        sign = replace(
            name,
            color=request.sign_color,
            font_reference=self.fonts.sign,
            gravity=Gravity.NORTH,
            alignment=Alignment.CENTER,
        )
        ops.append(self._text("signature", request.signature, sign))
        return ops

    def _delta(self, field: DeltaField, request: CardRequest, style: TextStyle) -> TextOp:
        rendered = field.render(self.deltas, request.current, request.baseline)
        if field.colored:
            style = replace(style, color=rendered.color)
        return self._text(field.element, rendered.text, style)

    @staticmethod
    def _text(element: str, text: str, style: TextStyle) -> TextOp:
        return TextOp(element, text, TEXT_SLOTS[element], style)
