from __future__ import annotations

from dataclasses import replace
from unittest import mock

import numpy as np
import pytest

from mandelfill import (
    FillMode,
    InvalidConfig,
    InvalidFillMode,
    PixelGrid,
    RenderConfig,
    SYMMETRIC_VIEWPORT,
    make_pixel_function,
    render,
    render_hue_cycle,
    resolve_config,
)
from mandelfill.fill import FillStrategy


@pytest.mark.parametrize("mode", [m for m in FillMode if m is not FillMode.SEQUENTIAL])
def test_all_modes_render_identical_grids(mode, smooth_config):
    expected = render(smooth_config)
    result = render(replace(smooth_config, fill_mode=mode))
    np.testing.assert_array_equal(result.grid.as_array(), expected.grid.as_array())


def test_result_carries_resolved_config():
    result = render(RenderConfig(width=8, height=6, max_iterations=20))
    assert result.config.width == 8
    assert result.config.threshold == 4.0
    assert result.config.fill_mode is FillMode.SEQUENTIAL
    assert result.grid.width == 8 and result.grid.height == 6
    assert result.grid.is_complete()


def test_alpha_is_opaque_and_channels_bounded(small_config):
    pixels = render(small_config).grid.as_array()
    assert (pixels[..., 3] == 255).all()
    assert pixels.dtype == np.uint8


def test_origin_pixel_is_black():
    config = resolve_config(RenderConfig(width=4, height=4, viewport=SYMMETRIC_VIEWPORT, max_iterations=50))
    # (row 2, col 2) maps to the plane origin
    assert make_pixel_function(config)(2, 2) == (0, 0, 0, 255)
    assert render(config).grid.get(2, 2) == (0, 0, 0, 255)


def test_scaling_resamples_without_recolouring(small_config):
    base = render(small_config).grid
    doubled = render(replace(small_config, scale=2)).grid
    assert (doubled.width, doubled.height) == (2 * base.width, 2 * base.height)
    np.testing.assert_array_equal(doubled.as_array()[::2, ::2], base.as_array())


def test_invalid_fill_mode_is_raised_before_allocation(small_config):
    with mock.patch("mandelfill.renderer.PixelGrid", wraps=PixelGrid) as grid_cls:
        with pytest.raises(InvalidFillMode):
            render(replace(small_config, fill_mode="turbo"))
    grid_cls.assert_not_called()


def test_invalid_config_is_raised_before_allocation():
    with mock.patch("mandelfill.renderer.PixelGrid", wraps=PixelGrid) as grid_cls:
        with pytest.raises(InvalidConfig):
            render(RenderConfig(width=0))
    grid_cls.assert_not_called()


class _SkippingFill(FillStrategy):
    mode = FillMode.SEQUENTIAL

    def fill(self, grid, config, pixel_fn):
        grid.set(0, 0, pixel_fn(0, 0))


def test_incomplete_fill_is_not_returned(small_config):
    with pytest.raises(RuntimeError, match="exactly once"):
        render(small_config, strategy=_SkippingFill())


def test_hue_cycle_advances_hue_offset(small_config):
    results = render_hue_cycle(small_config, 3, 120.0)
    offsets = [r.config.hue_offset for r in results]
    assert offsets == [30.0, 150.0, 270.0]
    assert not np.array_equal(results[0].grid.as_array(), results[1].grid.as_array())


def test_hue_cycle_with_no_frames(small_config):
    assert render_hue_cycle(small_config, 0, 10.0) == []
