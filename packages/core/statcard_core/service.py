"""Stat card rendering service: validate, compose, persist, report."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from statcard_renderer import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    AssetError,
    CardRequest,
    ImageOp,
    LayoutEngine,
    PillowBackend,
    RenderedImage,
    StatCardError,
    TextOp,
)

from .config import CardConfig
from .logging_setup import RenderLogAdapter, get_logger, render_logger
from .record import decode_record


UNKNOWN_ERROR = "Unknown Error!"


@dataclass(frozen=True)
class RenderResult:
    output_path: Path | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


def describe_error(exc: BaseException) -> str:
    message = str(exc).strip()
    return message or type(exc).__name__


class CardService:
    """Renders one card per call; instances hold only read-only settings."""

    def __init__(
        self,
        config: CardConfig,
        backend: PillowBackend | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config
        self.backend = backend or PillowBackend()
        self.layout = LayoutEngine(
            assets=config.asset_library(),
            fonts=config.font_set(),
            palette=config.color_palette(),
            credit=config.render.credit,
            clock=clock,
        )
        self._log = get_logger()

    def render(self, request: CardRequest) -> RenderResult:
        log = render_logger(request.user_id, request.mode, request.output_path)
        started = time.perf_counter()
        try:
            return self._render(request, log, started)
        except (StatCardError, OSError, ValueError) as exc:
            log.warning(
                "render failed: %s",
                exc,
                extra={"event": "render_failed", "duration_ms": _elapsed_ms(started)},
            )
            self._discard_output(request, log)
            return RenderResult(error=describe_error(exc))
        except Exception:
            log.exception(
                "render failed unexpectedly",
                extra={"event": "render_failed", "duration_ms": _elapsed_ms(started)},
            )
            self._discard_output(request, log)
            return RenderResult(error=UNKNOWN_ERROR)

    def make_card(self, request: CardRequest) -> str:
        """Render ``request``; empty string on success, else a readable error."""
        return self.render(request).error

    def make_card_from_record(self, record: str) -> str:
        try:
            request = decode_record(record)
        except StatCardError as exc:
            self._log.warning("record rejected: %s", exc, extra={"event": "record_rejected"})
            return describe_error(exc)
        return self.make_card(request)

    def _render(self, request: CardRequest, log: RenderLogAdapter, started: float) -> RenderResult:
        request.validate()
        log.info("render start", extra={"event": "render_start"})

        canvas = self.backend.create(CANVAS_WIDTH, CANVAS_HEIGHT)
        for op in self.layout.plan(request):
            if isinstance(op, ImageOp):
                self._draw_image(canvas, op, log)
            elif isinstance(op, TextOp):
                canvas.draw_text(op.text, op.placement, op.style)

        path = canvas.save(Path(request.output_path), quality=self.config.render.quality)
        log.info(
            "render ok",
            extra={"event": "render_ok", "output_path": path, "duration_ms": _elapsed_ms(started)},
        )
        return RenderResult(output_path=path)

    def _draw_image(self, canvas: RenderedImage, op: ImageOp, log: RenderLogAdapter) -> None:
        try:
            canvas.draw_image(op.path, op.placement)
        except AssetError:
            if op.fallback is None:
                raise
            log.info(
                "asset %s missing, using %s",
                op.path,
                op.fallback,
                extra={"event": "avatar_fallback", "element": op.element},
            )
            canvas.draw_image(op.fallback, op.placement)

    @staticmethod
    def _discard_output(request: CardRequest, log: RenderLogAdapter) -> None:
        # A card from an earlier render must not outlive a failed one.
        if not str(request.output_path).strip():
            return
        path = Path(request.output_path)
        if not path.is_file():
            return
        try:
            path.unlink()
        except OSError as exc:
            log.warning("could not remove stale output: %s", exc, extra={"event": "stale_output"})
        else:
            log.info("removed stale output", extra={"event": "stale_output"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 1)
