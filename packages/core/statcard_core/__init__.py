"""Core app services for settings, logging, record decoding and card rendering."""

from .config import CardConfig, config_path, load_config, save_config, with_overrides
from .record import decode_record, encode_record
from .service import UNKNOWN_ERROR, CardService, RenderResult

__all__ = [
    "UNKNOWN_ERROR",
    "CardConfig",
    "CardService",
    "RenderResult",
    "config_path",
    "decode_record",
    "encode_record",
    "load_config",
    "save_config",
    "with_overrides",
]
