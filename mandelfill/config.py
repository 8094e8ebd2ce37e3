"""Render configuration and default resolution."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Optional, Union

from .errors import DegenerateViewport, InvalidConfig, InvalidFillMode


class FillMode(str, Enum):
    """Selector for the strategy that populates the pixel grid."""

    SEQUENTIAL = "seq"
    PER_PIXEL = "pixel"
    PER_ROW = "row"
    WORKER_POOL = "workers"

    @classmethod
    def parse(cls, value: Union["FillMode", str]) -> "FillMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            for mode in cls:
                if key == mode.value or key.upper() == mode.name:
                    return mode
        raise InvalidFillMode(value)


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane mapped onto the raster."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def x_extent(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_extent(self) -> float:
        return self.y_max - self.y_min


CLASSIC_VIEWPORT = Viewport(x_min=-2.5, x_max=1.0, y_min=-1.0, y_max=1.0)
SYMMETRIC_VIEWPORT = Viewport(x_min=-1.0, x_max=1.0, y_min=-1.0, y_max=1.0)

VIEWPORTS = {
    "classic": CLASSIC_VIEWPORT,
    "symmetric": SYMMETRIC_VIEWPORT,
}


@dataclass(frozen=True)
class RenderConfig:
    """Parameters for a single render.

    ``None`` marks a field as unset; :func:`resolve_config` fills it from the
    defaults. ``width`` and ``height`` are the base size before ``scale`` is
    applied, the allocated raster is ``raster_width`` x ``raster_height``.
    """

    width: Optional[int] = None
    height: Optional[int] = None
    threshold: Optional[float] = None
    max_iterations: Optional[int] = None
    workers: Optional[int] = None
    scale: Optional[int] = None
    fill_mode: Optional[Union[FillMode, str]] = None
    zoom: Optional[float] = None
    offset_x: Optional[float] = None
    offset_y: Optional[float] = None
    hue_offset: Optional[float] = None
    smooth: Optional[bool] = None
    viewport: Optional[Viewport] = None

    @property
    def raster_width(self) -> int:
        return int(self.width) * int(self.scale or 1)

    @property
    def raster_height(self) -> int:
        return int(self.height) * int(self.scale or 1)

    def unset_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name) is None)


DEFAULT_CONFIG = RenderConfig(
    width=700,
    height=700,
    threshold=4.0,
    max_iterations=1000,
    workers=4,
    scale=1,
    fill_mode=FillMode.SEQUENTIAL,
    zoom=1.0,
    offset_x=0.0,
    offset_y=0.0,
    hue_offset=0.0,
    smooth=False,
    viewport=CLASSIC_VIEWPORT,
)


def resolve_config(partial: Optional[RenderConfig] = None, defaults: RenderConfig = DEFAULT_CONFIG) -> RenderConfig:
    """Fill unset fields of ``partial`` from ``defaults`` and validate the result.

    Neither argument is modified. The fill mode is normalised when it names a
    known strategy and passed through untouched otherwise, so that the
    renderer can report :class:`InvalidFillMode` itself.
    """

    if partial is None:
        partial = RenderConfig()

    missing = {name: getattr(defaults, name) for name in partial.unset_fields()}
    resolved = replace(partial, **missing)

    unresolved = resolved.unset_fields()
    if unresolved:
        raise InvalidConfig(f"no default for: {', '.join(unresolved)}")

    try:
        resolved = replace(resolved, fill_mode=FillMode.parse(resolved.fill_mode))
    except InvalidFillMode:
        pass

    _validate(resolved)
    return resolved


def _validate(config: RenderConfig) -> None:
    for name in ("width", "height", "scale", "max_iterations", "workers"):
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidConfig(f"{name} must be a positive integer, got {value!r}")

    if not math.isfinite(config.threshold) or config.threshold <= 0:
        raise InvalidConfig(f"threshold must be positive, got {config.threshold!r}")

    for name in ("offset_x", "offset_y", "hue_offset"):
        if not math.isfinite(getattr(config, name)):
            raise InvalidConfig(f"{name} must be finite, got {getattr(config, name)!r}")

    if not math.isfinite(config.zoom) or config.zoom <= 0:
        raise DegenerateViewport(f"zoom must be positive, got {config.zoom!r}")

    viewport = config.viewport
    if not (math.isfinite(viewport.x_extent) and math.isfinite(viewport.y_extent)):
        raise DegenerateViewport(f"viewport bounds must be finite: {viewport}")
    if viewport.x_extent == 0 or viewport.y_extent == 0:
        raise DegenerateViewport(f"viewport has zero extent: {viewport}")
