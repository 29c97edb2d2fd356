"""Renderer package for stat card composition."""

from .backend import PillowBackend, RenderedImage
from .deltas import ARROWS, SIGNS, DeltaFormatter, DeltaText, Direction, GlyphTable, direction
from .errors import AssetError, EncodeError, InvalidRequestError, RecordDecodeError, StatCardError
from .formatting import abbreviate, format_count, round2
from .layout import AssetLibrary, DrawOp, ImageOp, LayoutEngine, TextOp
from .models import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    Alignment,
    CardRequest,
    Gravity,
    HitCounts,
    Placement,
    Polarity,
    StatSnapshot,
    TextStyle,
    polarity_of,
)
from .similarity import SIMILAR_THRESHOLD, hamming_distance, is_similar
from .themes import FontSet, Palette

__all__ = [
    "ARROWS",
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "SIGNS",
    "SIMILAR_THRESHOLD",
    "Alignment",
    "AssetError",
    "AssetLibrary",
    "CardRequest",
    "DeltaFormatter",
    "DeltaText",
    "Direction",
    "DrawOp",
    "EncodeError",
    "FontSet",
    "GlyphTable",
    "Gravity",
    "HitCounts",
    "ImageOp",
    "InvalidRequestError",
    "LayoutEngine",
    "Palette",
    "PillowBackend",
    "Placement",
    "Polarity",
    "RecordDecodeError",
    "RenderedImage",
    "StatCardError",
    "StatSnapshot",
    "TextOp",
    "TextStyle",
    "abbreviate",
    "direction",
    "format_count",
    "hamming_distance",
    "is_similar",
    "polarity_of",
    "round2",
]
