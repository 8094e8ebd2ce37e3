"""Public API for Mandelbrot rendering utilities."""

from .color import color_for, hsv_to_rgb
from .config import (
    CLASSIC_VIEWPORT,
    DEFAULT_CONFIG,
    SYMMETRIC_VIEWPORT,
    FillMode,
    RenderConfig,
    Viewport,
    resolve_config,
)
from .errors import (
    DegenerateViewport,
    InvalidConfig,
    InvalidFillMode,
    MandelfillError,
    SmoothingDomainError,
    UnsupportedFormat,
)
from .escape import FractalSample, escape_count, sample_point, smooth_count, stability
from .fill import FillStrategy, PerPixelFill, PerRowFill, SequentialFill, WorkerPoolFill, strategy_for
from .grid import PixelGrid
from .renderer import RenderResult, make_pixel_function, render, render_hue_cycle
from .viewport import map_to_plane, pixel_to_complex

__all__ = [
    "CLASSIC_VIEWPORT",
    "DEFAULT_CONFIG",
    "DegenerateViewport",
    "FillMode",
    "FillStrategy",
    "FractalSample",
    "InvalidConfig",
    "InvalidFillMode",
    "MandelfillError",
    "PerPixelFill",
    "PerRowFill",
    "PixelGrid",
    "RenderConfig",
    "RenderResult",
    "SYMMETRIC_VIEWPORT",
    "SequentialFill",
    "SmoothingDomainError",
    "UnsupportedFormat",
    "Viewport",
    "WorkerPoolFill",
    "color_for",
    "escape_count",
    "hsv_to_rgb",
    "make_pixel_function",
    "map_to_plane",
    "pixel_to_complex",
    "render",
    "render_hue_cycle",
    "resolve_config",
    "sample_point",
    "smooth_count",
    "stability",
    "strategy_for",
]
