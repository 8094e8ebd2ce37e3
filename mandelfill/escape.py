"""Escape-time iteration of the quadratic Mandelbrot recurrence."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import SmoothingDomainError

LOG2 = math.log(2.0)
EPSILON = 1e-12


@dataclass(frozen=True)
class FractalSample:
    """State of a single point after the escape-time loop finished."""

    x0: float
    y0: float
    x: float
    y: float
    x2: float
    y2: float
    iterations: int
    escaped: bool
    escape_count: float
    stability: float


def _iterate(x0: float, y0: float, threshold: float, max_iterations: int) -> tuple[float, float, float, float, int]:
    x = y = x2 = y2 = 0.0
    i = 0
    while x2 + y2 <= threshold and i < max_iterations:
        y = 2 * x * y + y0
        x = x2 - y2 + x0
        x2 = x * x
        y2 = y * y
        i += 1
    return x, y, x2, y2, i


def smooth_count(iterations: int, modulus_sq: float, *, clamp: bool = True) -> float:
    """Continuous extension of ``iterations`` given the final ``|z|**2``.

    The double logarithm is undefined for ``|z| <= 1``. By default its
    arguments are clamped, with ``clamp=False`` such input raises
    :class:`SmoothingDomainError` instead.
    """

    if not clamp and not modulus_sq > 1.0:
        raise SmoothingDomainError(f"cannot smooth a point with |z|^2 = {modulus_sq!r}")
    modulus = max(math.sqrt(modulus_sq), 1.0 + EPSILON)
    log_modulus = max(math.log(modulus), EPSILON)
    return iterations + 1 - math.log(log_modulus) / LOG2


def escape_count(x0: float, y0: float, threshold: float, max_iterations: int, smooth: bool = False) -> float:
    """Number of iterations before ``(x0, y0)`` leaves the ``threshold`` radius.

    Points that never escape report ``max_iterations`` in either mode.
    """

    _, _, x2, y2, i = _iterate(x0, y0, threshold, max_iterations)
    if smooth and i < max_iterations:
        return smooth_count(i, x2 + y2)
    return float(i)


def stability(count: float, max_iterations: int) -> float:
    """Normalise an escape count into ``[0, 1]``; 1 means the point never escaped."""

    return min(max(count / max_iterations, 0.0), 1.0)


def sample_point(x0: float, y0: float, threshold: float, max_iterations: int, smooth: bool = False) -> FractalSample:
    x, y, x2, y2, i = _iterate(x0, y0, threshold, max_iterations)
    escaped = i < max_iterations
    count = smooth_count(i, x2 + y2) if smooth and escaped else float(i)
    return FractalSample(
        x0=x0,
        y0=y0,
        x=x,
        y=y,
        x2=x2,
        y2=y2,
        iterations=i,
        escaped=escaped,
        escape_count=count,
        stability=stability(count, max_iterations),
    )
