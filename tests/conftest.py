"""Shared fixtures: small configurations that render quickly."""

from __future__ import annotations

from dataclasses import replace

import pytest

from mandelfill import RenderConfig, resolve_config


@pytest.fixture()
def small_config() -> RenderConfig:
    return resolve_config(
        RenderConfig(width=24, height=16, max_iterations=60, workers=3, hue_offset=30.0)
    )


@pytest.fixture()
def smooth_config(small_config: RenderConfig) -> RenderConfig:
    return replace(small_config, smooth=True, zoom=1.5, offset_x=0.4, offset_y=-0.1)
