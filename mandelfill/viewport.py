"""Mapping between raster pixels and the complex plane."""

from __future__ import annotations

from .config import RenderConfig


def map_to_plane(pixel: float, extent: float, plane_min: float, plane_max: float) -> float:
    """Linearly rescale ``pixel`` in ``[0, extent)`` onto ``[plane_min, plane_max)``."""

    return plane_min + (pixel / extent) * (plane_max - plane_min)


def pixel_to_complex(config: RenderConfig, row: int, col: int) -> tuple[float, float]:
    """Return the ``(x0, y0)`` plane coordinate sampled by the pixel at ``row, col``.

    ``config`` must be resolved. Zoom and offset are applied after the linear
    rescale, so zooming contracts the viewport towards the plane origin
    before the offset translates it.
    """

    viewport = config.viewport
    x = map_to_plane(col, config.raster_width, viewport.x_min, viewport.x_max)
    y = map_to_plane(row, config.raster_height, viewport.y_min, viewport.y_max)
    return x / config.zoom - config.offset_x, y / config.zoom - config.offset_y
