"""Conversion of point stability into RGB colour."""

from __future__ import annotations

import math

BLACK = (0, 0, 0)
PRECISION = 2


def round_places(value: float, places: int = PRECISION) -> float:
    """Round half away from zero to ``places`` decimals."""

    multiplier = 10.0 ** min(max(places, 0), 16)
    scaled = value * multiplier
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / multiplier


def hsv_to_unit_rgb(hue: float, saturation: float, value: float) -> tuple[float, float, float]:
    """Convert HSV (hue in degrees) into unrounded RGB channels in ``[0, 1]``."""

    hue = hue % 360.0
    if saturation == 0:
        return value, value, value

    chroma = value * saturation
    sector = hue / 60.0
    intermediate = chroma * (1 - abs(sector % 2 - 1))

    if 0 <= sector <= 1:
        r, g, b = chroma, intermediate, 0.0
    elif 1 < sector <= 2:
        r, g, b = intermediate, chroma, 0.0
    elif 2 < sector <= 3:
        r, g, b = 0.0, chroma, intermediate
    elif 3 < sector <= 4:
        r, g, b = 0.0, intermediate, chroma
    elif 4 < sector <= 5:
        r, g, b = intermediate, 0.0, chroma
    else:
        # last sector, also catches rounding at exactly 360 degrees
        r, g, b = chroma, 0.0, intermediate

    match = value - chroma
    return r + match, g + match, b + match


def hsv_to_rgb(hue: float, saturation: float, value: float) -> tuple[int, int, int]:
    """Convert HSV into 8-bit RGB.

    Channels are rounded to two decimals before being scaled to 255 and
    truncated, matching the reference palette bit for bit.
    """

    return tuple(
        min(max(int(round_places(channel) * 255.0), 0), 255)
        for channel in hsv_to_unit_rgb(hue, saturation, value)
    )


def color_for(stability: float, hue_offset: float = 0.0) -> tuple[int, int, int]:
    """Colour of a point with the given ``stability``.

    Points inside the set (stability 1) and points that escaped immediately
    (instability 1) are black; everything else is coloured by hue rotation
    with saturation rising and value falling as the point gets less stable.
    """

    instability = 1.0 - stability
    if instability == 1.0 or stability >= 1.0:
        return BLACK
    hue = (instability * 360.0 + hue_offset) % 360.0
    return hsv_to_rgb(hue, instability, stability)
