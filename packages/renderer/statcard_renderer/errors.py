"""Error types raised while decoding, composing and saving stat cards."""

from __future__ import annotations

from pathlib import Path


class StatCardError(Exception):
    """Base class for every failure the card pipeline reports by message."""


class RecordDecodeError(StatCardError):
    def __init__(self, field: str, line: int, reason: str) -> None:
        super().__init__(f"record field {field!r} (line {line}): {reason}")
        self.field = field
        self.line = line
        self.reason = reason


class InvalidRequestError(StatCardError):
    pass


class AssetError(StatCardError):
    def __init__(self, path: Path | str, reason: str = "unable to open asset") -> None:
        super().__init__(f"{reason}: {path}")
        self.path = Path(path)
        self.reason = reason


class EncodeError(StatCardError):
    pass
