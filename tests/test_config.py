from __future__ import annotations

import math

import pytest

from mandelfill import (
    CLASSIC_VIEWPORT,
    DEFAULT_CONFIG,
    DegenerateViewport,
    FillMode,
    InvalidConfig,
    InvalidFillMode,
    RenderConfig,
    Viewport,
    resolve_config,
)


def test_resolve_without_overrides_returns_defaults():
    assert resolve_config() == DEFAULT_CONFIG
    assert resolve_config(None).viewport == CLASSIC_VIEWPORT


def test_resolve_fills_only_unset_fields():
    partial = RenderConfig(width=10, threshold=16.0, smooth=True)
    resolved = resolve_config(partial)
    assert resolved.width == 10
    assert resolved.threshold == 16.0
    assert resolved.smooth is True
    assert resolved.height == DEFAULT_CONFIG.height
    assert resolved.max_iterations == DEFAULT_CONFIG.max_iterations
    assert resolved.fill_mode is FillMode.SEQUENTIAL


def test_resolve_does_not_mutate_inputs():
    partial = RenderConfig(width=10)
    resolve_config(partial)
    assert partial.height is None
    assert partial.unset_fields()


def test_explicit_zero_offsets_are_kept():
    defaults = resolve_config(RenderConfig(offset_x=1.0, offset_y=1.0))
    resolved = resolve_config(RenderConfig(offset_x=0.0, offset_y=0.0), defaults)
    assert (resolved.offset_x, resolved.offset_y) == (0.0, 0.0)


def test_scale_multiplies_raster_dimensions_and_is_idempotent():
    resolved = resolve_config(RenderConfig(width=30, height=20, scale=3))
    assert (resolved.raster_width, resolved.raster_height) == (90, 60)
    again = resolve_config(resolved)
    assert again == resolved
    assert (again.raster_width, again.raster_height) == (90, 60)


@pytest.mark.parametrize("value", ["pixel", "PER_PIXEL", FillMode.PER_PIXEL, " pixel "])
def test_fill_mode_is_normalised(value):
    assert resolve_config(RenderConfig(fill_mode=value)).fill_mode is FillMode.PER_PIXEL


def test_unknown_fill_mode_is_left_for_the_renderer():
    assert resolve_config(RenderConfig(fill_mode="gpu")).fill_mode == "gpu"
    with pytest.raises(InvalidFillMode):
        FillMode.parse("gpu")


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 0},
        {"height": -4},
        {"scale": 0},
        {"max_iterations": 0},
        {"workers": 0},
        {"width": 2.5},
        {"threshold": 0.0},
        {"threshold": math.inf},
        {"hue_offset": math.nan},
    ],
)
def test_invalid_fields_are_rejected(overrides):
    with pytest.raises(InvalidConfig):
        resolve_config(RenderConfig(**overrides))


@pytest.mark.parametrize(
    "overrides",
    [
        {"zoom": 0.0},
        {"zoom": -1.0},
        {"zoom": math.nan},
        {"viewport": Viewport(x_min=1.0, x_max=1.0, y_min=-1.0, y_max=1.0)},
        {"viewport": Viewport(x_min=-1.0, x_max=1.0, y_min=0.5, y_max=0.5)},
    ],
)
def test_degenerate_viewports_are_rejected(overrides):
    with pytest.raises(DegenerateViewport):
        resolve_config(RenderConfig(**overrides))


def test_configuration_errors_are_value_errors():
    with pytest.raises(ValueError):
        resolve_config(RenderConfig(zoom=0.0))


def test_defaults_missing_a_field_are_reported():
    with pytest.raises(InvalidConfig, match="no default"):
        resolve_config(RenderConfig(), defaults=RenderConfig(width=1))
