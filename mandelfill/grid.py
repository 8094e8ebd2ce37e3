"""Dense RGBA raster shared by the fill strategies."""

from __future__ import annotations

import numpy as np
import PIL.Image

CHANNELS = 4
OPAQUE = 255


class PixelGrid:
    """``height`` x ``width`` RGBA samples stored in a flat ``uint8`` buffer.

    Cell ``(row, col)`` lives at index ``row * width + col``. Writers never
    lock: the fill strategies hand each cell to exactly one task, so writes
    from different threads touch disjoint slices of the buffer. Every write
    is counted, which lets the renderer check that a fill covered each cell
    exactly once.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._buffer = np.zeros(self.width * self.height * CHANNELS, dtype=np.uint8)
        self._writes = np.zeros(self.width * self.height, dtype=np.uint32)

    def __len__(self) -> int:
        return self.width * self.height

    def index(self, row: int, col: int) -> int:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"cell ({row}, {col}) outside {self.width}x{self.height} grid")
        return row * self.width + col

    def set(self, row: int, col: int, rgba: tuple[int, ...]) -> None:
        cell = self.index(row, col)
        start = cell * CHANNELS
        self._buffer[start:start + CHANNELS] = rgba
        self._writes[cell] += 1

    def get(self, row: int, col: int) -> tuple[int, int, int, int]:
        start = self.index(row, col) * CHANNELS
        return tuple(int(v) for v in self._buffer[start:start + CHANNELS])

    @property
    def write_counts(self) -> np.ndarray:
        return self._writes.reshape(self.height, self.width)

    def is_complete(self) -> bool:
        """True when every cell was written exactly once."""

        return bool(np.all(self._writes == 1))

    def as_array(self) -> np.ndarray:
        """View of the buffer shaped ``(height, width, 4)``."""

        return self._buffer.reshape(self.height, self.width, CHANNELS)

    def to_image(self) -> PIL.Image.Image:
        return PIL.Image.fromarray(self.as_array().copy())
