"""Decoding of the newline-delimited positional card record."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from statcard_renderer import CardRequest, HitCounts, RecordDecodeError, StatSnapshot


def _text(value: str) -> str:
    return value


def _int(value: str) -> int:
    return int(value.strip())


def _float(value: str) -> float:
    return float(value.strip())


# (key, parser) in record order. "cur." and "base." keys feed the two snapshots.
RECORD_FIELDS: tuple[tuple[str, Callable[[str], Any]], ...] = (
    ("data_color", _text),
    ("profile_color", _text),
    ("sign_color", _text),
    ("mode", _int),
    ("user_id", _int),
    ("country", _text),
    ("username", _text),
    ("contact_id", _text),
    ("signature", _text),
    ("background", _text),
    ("profile_frame", _text),
    ("data_frame", _text),
    ("sign_frame", _text),
    ("opacity", _int),
    ("count300", _int),
    ("count100", _int),
    ("count50", _int),
    ("cur.play_count", _int),
    ("cur.total_score", _int),
    ("cur.ranked_score", _int),
    ("reported_total_hits", _int),
    ("cur.pp", _float),
    ("cur.pp_country_rank", _int),
    ("cur.pp_rank", _int),
    ("cur.count_ssh", _int),
    ("cur.count_ss", _int),
    ("cur.count_sh", _int),
    ("cur.count_s", _int),
    ("cur.count_a", _int),
    ("total_seconds_played", _int),
    ("cur.level", _float),
    ("cur.accuracy", _float),
    ("base.total_score", _int),
    ("base.ranked_score", _int),
    ("base.total_hits", _int),
    ("base.accuracy", _float),
    ("base.pp", _float),
    ("base.level", _float),
    ("base.pp_rank", _int),
    ("base.pp_country_rank", _int),
    ("base.play_count", _int),
    ("base.count_ssh", _int),
    ("base.count_ss", _int),
    ("base.count_sh", _int),
    ("base.count_s", _int),
    ("base.count_a", _int),
    ("day_offset", _int),
    ("output_path", _text),
)


def _split(text: str) -> list[str]:
    # One field per line; anything past the output path line is ignored.
    lines = text.split("\n")[: len(RECORD_FIELDS)]
    return [line.rstrip("\r") for line in lines]


def decode_record(text: str) -> CardRequest:
    lines = _split(text)
    values: dict[str, Any] = {}
    for index, (key, parser) in enumerate(RECORD_FIELDS):
        line_no = index + 1
        if index >= len(lines):
            raise RecordDecodeError(key, line_no, "missing")
        try:
            values[key] = parser(lines[index])
        except ValueError as exc:
            raise RecordDecodeError(key, line_no, f"invalid value {lines[index]!r}") from exc

    output = values["output_path"].strip()
    if not output:
        raise RecordDecodeError("output_path", len(RECORD_FIELDS), "empty")

    hits = HitCounts(values["count300"], values["count100"], values["count50"])
    current = {k[4:]: v for k, v in values.items() if k.startswith("cur.")}
    baseline = {k[5:]: v for k, v in values.items() if k.startswith("base.")}
    # The reported total is superseded by the per-judgement counts.
    current["total_hits"] = hits.total

    return CardRequest(
        data_color=values["data_color"],
        profile_color=values["profile_color"],
        sign_color=values["sign_color"],
        mode=values["mode"],
        user_id=values["user_id"],
        country=values["country"].strip(),
        username=values["username"],
        contact_id=values["contact_id"],
        signature=values["signature"],
        background=values["background"],
        profile_frame=values["profile_frame"],
        data_frame=values["data_frame"],
        sign_frame=values["sign_frame"],
        opacity=values["opacity"],
        current=StatSnapshot(**current),
        baseline=StatSnapshot(**baseline),
        output_path=Path(output),
        day_offset=values["day_offset"],
        hits=hits,
        total_seconds_played=values["total_seconds_played"],
    )


def encode_record(request: CardRequest) -> str:
    """Inverse of :func:`decode_record`, for fixtures and tooling."""
    flat: dict[str, Any] = {
        "data_color": request.data_color,
        "profile_color": request.profile_color,
        "sign_color": request.sign_color,
        "mode": request.mode,
        "user_id": request.user_id,
        "country": request.country,
        "username": request.username,
        "contact_id": request.contact_id,
        "signature": request.signature,
        "background": request.background,
        "profile_frame": request.profile_frame,
        "data_frame": request.data_frame,
        "sign_frame": request.sign_frame,
        "opacity": request.opacity,
        "count300": request.hits.count300,
        "count100": request.hits.count100,
        "count50": request.hits.count50,
        "reported_total_hits": request.current.total_hits,
        "total_seconds_played": request.total_seconds_played,
        "day_offset": request.day_offset,
        "output_path": str(request.output_path),
    }
    lines = []
    for key, _parser in RECORD_FIELDS:
        if key.startswith("cur."):
            lines.append(str(getattr(request.current, key[4:])))
        elif key.startswith("base."):
            lines.append(str(getattr(request.baseline, key[5:])))
        else:
            lines.append(str(flat[key]))
    return "\n".join(lines)
