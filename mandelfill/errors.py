"""Exception hierarchy shared by the renderer and its collaborators."""

from __future__ import annotations


class MandelfillError(Exception):
    """Base class for every error raised by ``mandelfill``."""


class InvalidConfig(MandelfillError, ValueError):
    """A render configuration field is out of range."""


class DegenerateViewport(InvalidConfig):
    """The viewport collapses to zero extent or the zoom is unusable."""


class InvalidFillMode(MandelfillError, ValueError):
    """The fill mode does not name a known strategy."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"invalid mode: {mode!r}")
        self.mode = mode


class SmoothingDomainError(MandelfillError, ArithmeticError):
    """Continuous smoothing was requested for a point that did not escape."""


class UnsupportedFormat(MandelfillError, ValueError):
    """The requested image extension has no encoder."""

    def __init__(self, extension: str) -> None:
        super().__init__(f"Unsupported image format: {extension}")
        self.extension = extension
