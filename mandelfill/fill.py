"""Interchangeable strategies that populate a :class:`PixelGrid`."""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Optional, Union

from .config import FillMode, RenderConfig
from .grid import PixelGrid

logger = logging.getLogger(__name__)

PixelFunction = Callable[[int, int], tuple[int, int, int, int]]

_STOP = None


class FillStrategy(ABC):
    """Compute ``pixel_fn(row, col)`` for every cell of a grid and store it.

    Implementations partition the cells so that no two tasks write the same
    cell, and return only after every task has finished.
    """

    mode: FillMode

    @abstractmethod
    def fill(self, grid: PixelGrid, config: RenderConfig, pixel_fn: PixelFunction) -> None:
        ...


def _fill_cell(grid: PixelGrid, pixel_fn: PixelFunction, row: int, col: int) -> None:
    grid.set(row, col, pixel_fn(row, col))


def _fill_row(grid: PixelGrid, pixel_fn: PixelFunction, row: int) -> None:
    for col in range(grid.width):
        _fill_cell(grid, pixel_fn, row, col)


def _join(futures: list[Future]) -> None:
    wait(futures)
    for future in futures:
        future.result()


class SequentialFill(FillStrategy):
    mode = FillMode.SEQUENTIAL

    def fill(self, grid: PixelGrid, config: RenderConfig, pixel_fn: PixelFunction) -> None:
        for row in range(grid.height):
            _fill_row(grid, pixel_fn, row)


class PerPixelFill(FillStrategy):
    """One task per cell."""

    mode = FillMode.PER_PIXEL

    def __init__(self, max_threads: Optional[int] = None) -> None:
        self.max_threads = max_threads

    def fill(self, grid: PixelGrid, config: RenderConfig, pixel_fn: PixelFunction) -> None:
        with ThreadPoolExecutor(max_workers=self.max_threads, thread_name_prefix="mandelfill-pixel") as executor:
            futures = [
                executor.submit(_fill_cell, grid, pixel_fn, row, col)
                for row in range(grid.height)
                for col in range(grid.width)
            ]
            _join(futures)


class PerRowFill(FillStrategy):
    """One task per row, each filling its row sequentially."""

    mode = FillMode.PER_ROW

    def __init__(self, max_threads: Optional[int] = None) -> None:
        self.max_threads = max_threads

    def fill(self, grid: PixelGrid, config: RenderConfig, pixel_fn: PixelFunction) -> None:
        with ThreadPoolExecutor(max_workers=self.max_threads, thread_name_prefix="mandelfill-row") as executor:
            futures = [executor.submit(_fill_row, grid, pixel_fn, row) for row in range(grid.height)]
            _join(futures)


class WorkerPoolFill(FillStrategy):
    """``config.workers`` threads consuming ``(row, col)`` jobs from a bounded queue.

    The producer blocks while the queue is full. A worker that hits an error
    keeps draining jobs without computing them so the producer can always
    finish; the first error is raised once every worker has stopped.
    """

    mode = FillMode.WORKER_POOL

    def __init__(self, queue_size: Optional[int] = None) -> None:
        self.queue_size = queue_size

    def fill(self, grid: PixelGrid, config: RenderConfig, pixel_fn: PixelFunction) -> None:
        workers = int(config.workers)
        queue_size = self.queue_size if self.queue_size is not None else workers
        jobs: queue.Queue = queue.Queue(maxsize=max(queue_size, 1))
        errors: list[BaseException] = []
        errors_lock = threading.Lock()

        logger.info("using %d workers", workers)

        def consume() -> None:
            while True:
                job = jobs.get()
                if job is _STOP:
                    return
                if errors:
                    continue
                try:
                    _fill_cell(grid, pixel_fn, *job)
                except Exception as exc:
                    with errors_lock:
                        errors.append(exc)

        threads = [
            threading.Thread(target=consume, name=f"mandelfill-worker-{n}", daemon=True)
            for n in range(workers)
        ]
        for thread in threads:
            thread.start()

        for row in range(grid.height):
            for col in range(grid.width):
                jobs.put((row, col))
        for _ in threads:
            jobs.put(_STOP)

        for thread in threads:
            thread.join()

        if errors:
            raise errors[0]


STRATEGIES: dict[FillMode, Callable[[], FillStrategy]] = {
    FillMode.SEQUENTIAL: SequentialFill,
    FillMode.PER_PIXEL: PerPixelFill,
    FillMode.PER_ROW: PerRowFill,
    FillMode.WORKER_POOL: WorkerPoolFill,
}


def strategy_for(mode: Union[FillMode, str]) -> FillStrategy:
    """Instantiate the strategy selected by ``mode``; raises :class:`InvalidFillMode`."""

    return STRATEGIES[FillMode.parse(mode)]()
