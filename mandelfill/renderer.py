"""Rendering entry points for Mandelbrot frames."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Optional

import PIL.Image

from .color import color_for
from .config import DEFAULT_CONFIG, RenderConfig, resolve_config
from .escape import escape_count, stability
from .fill import FillStrategy, PixelFunction, strategy_for
from .grid import OPAQUE, PixelGrid
from .viewport import pixel_to_complex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """A fully populated grid together with the config that produced it."""

    grid: PixelGrid
    config: RenderConfig

    def to_image(self) -> PIL.Image.Image:
        return self.grid.to_image()


def make_pixel_function(config: RenderConfig) -> PixelFunction:
    """Build the per-cell ``(row, col) -> RGBA`` function for a resolved config."""

    threshold = config.threshold
    max_iterations = config.max_iterations
    smooth = bool(config.smooth)
    hue_offset = config.hue_offset

    def pixel(row: int, col: int) -> tuple[int, int, int, int]:
        x0, y0 = pixel_to_complex(config, row, col)
        count = escape_count(x0, y0, threshold, max_iterations, smooth)
        r, g, b = color_for(stability(count, max_iterations), hue_offset)
        return r, g, b, OPAQUE

    return pixel


def render(
    config: Optional[RenderConfig] = None,
    *,
    defaults: RenderConfig = DEFAULT_CONFIG,
    strategy: Optional[FillStrategy] = None,
) -> RenderResult:
    """Resolve ``config``, fill a new grid and return it.

    Configuration and fill-mode errors are raised before the grid is
    allocated. ``strategy`` overrides the one selected by ``fill_mode``.
    """

    resolved = resolve_config(config, defaults)
    if strategy is None:
        strategy = strategy_for(resolved.fill_mode)

    logger.info("Using mode: %s", strategy.mode.value)
    start = time.perf_counter()

    grid = PixelGrid(resolved.raster_width, resolved.raster_height)
    strategy.fill(grid, resolved, make_pixel_function(resolved))

    if not grid.is_complete():
        raise RuntimeError(f"{type(strategy).__name__} did not write every cell exactly once")

    logger.debug(
        "rendered %dx%d in %.3fs",
        grid.width,
        grid.height,
        time.perf_counter() - start,
    )
    return RenderResult(grid=grid, config=resolved)


def render_hue_cycle(config: Optional[RenderConfig], frames: int, hue_step: float, **kwargs) -> list[RenderResult]:
    """Render ``frames`` results with the hue offset advanced by ``hue_step`` each frame."""

    if frames <= 0:
        return []
    base = resolve_config(config, kwargs.get("defaults", DEFAULT_CONFIG))
    return [
        render(replace(base, hue_offset=(base.hue_offset + i * hue_step) % 360.0), **kwargs)
        for i in range(frames)
    ]
