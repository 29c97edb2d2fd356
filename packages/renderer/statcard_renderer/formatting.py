"""Number formatting for card labels."""

from __future__ import annotations


SUFFIXES = ("", "K", "M", "G")


def abbreviate(n: int) -> str:
    """Render ``n`` with two decimals and a K/M/G suffix.

    Values are divided by 1000 while their magnitude exceeds 1000, so
    ``1000`` stays ``"1000.00"`` and ``1001`` becomes ``"1.00K"``. Inputs
    that would need a fourth division (magnitude above 10**12) have no
    suffix and raise ``ValueError``.
    """
    value = float(n)
    tier = 0
    while abs(value) > 1000.0:
        value /= 1000.0
        tier += 1
    if tier >= len(SUFFIXES):
        raise ValueError(f"{n} is too large to abbreviate")
    return f"{value:.2f}{SUFFIXES[tier]}"


def round2(x: float) -> str:
    return f"{x:.2f}"


def format_count(n: int) -> str:
    return str(int(n))
