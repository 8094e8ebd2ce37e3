from __future__ import annotations

import io

import numpy as np
import PIL.Image
import pytest

from mandelfill import RenderConfig, UnsupportedFormat, resolve_config
from mandelfill.output import (
    adjust_image,
    encode_image,
    filename_with_flags,
    pil_format_name,
    save_image,
    write_animation,
)


@pytest.fixture()
def gradient_image() -> PIL.Image.Image:
    ramp = np.linspace(40, 200, 16, dtype=np.uint8)
    rgba = np.zeros((8, 16, 4), dtype=np.uint8)
    rgba[..., 0] = ramp
    rgba[..., 1] = ramp[::-1]
    rgba[..., 2] = 90
    rgba[..., 3] = 255
    return PIL.Image.fromarray(rgba)


@pytest.mark.parametrize("ext, name", [(".png", "PNG"), ("jpg", "JPEG"), (".JPEG", "JPEG"), (".gif", "GIF")])
def test_pil_format_name(ext, name):
    assert pil_format_name(ext) == name


@pytest.mark.parametrize("ext", [".bmp", "", ".tiff"])
def test_unsupported_extensions(ext):
    with pytest.raises(UnsupportedFormat, match="Unsupported image format"):
        pil_format_name(ext)


@pytest.mark.parametrize("ext, fmt", [(".png", "PNG"), (".jpg", "JPEG"), (".gif", "GIF")])
def test_encode_image_produces_decodable_stream(gradient_image, ext, fmt):
    data = encode_image(gradient_image, ext)
    decoded = PIL.Image.open(io.BytesIO(data))
    assert decoded.format == fmt
    assert decoded.size == gradient_image.size


def test_png_encoding_is_lossless(gradient_image):
    decoded = PIL.Image.open(io.BytesIO(encode_image(gradient_image, ".png")))
    np.testing.assert_array_equal(np.asarray(decoded), np.asarray(gradient_image))


def test_adjust_image_zero_is_identity(gradient_image):
    assert adjust_image(gradient_image) is gradient_image


def test_adjust_image_contrast_spreads_values(gradient_image):
    adjusted = adjust_image(gradient_image, contrast=50)
    assert adjusted.mode == "RGBA"
    before = np.asarray(gradient_image)[..., 0].astype(int)
    after = np.asarray(adjusted)[..., 0].astype(int)
    assert np.ptp(after) > np.ptp(before)
    assert (np.asarray(adjusted)[..., 3] == 255).all()


def test_adjust_image_brightness_raises_values(gradient_image):
    adjusted = adjust_image(gradient_image, brightness=20)
    assert np.asarray(adjusted)[..., :3].sum() > np.asarray(gradient_image)[..., :3].sum()


@pytest.mark.parametrize("name", ["out.png", "out.jpeg", "nested/dir/out.gif"])
def test_save_image_writes_file(tmp_path, gradient_image, name):
    path = save_image(gradient_image, tmp_path / name)
    assert path.exists()
    with PIL.Image.open(path) as reopened:
        assert reopened.size == gradient_image.size


def test_save_image_rejects_unknown_extension(tmp_path, gradient_image):
    with pytest.raises(UnsupportedFormat):
        save_image(gradient_image, tmp_path / "out.webp")


def test_write_animation(tmp_path, gradient_image):
    frames = [gradient_image, gradient_image.transpose(PIL.Image.Transpose.FLIP_LEFT_RIGHT)]
    path = write_animation(frames, tmp_path / "cycle.gif")
    with PIL.Image.open(path) as reopened:
        assert reopened.n_frames == 2


def test_write_animation_requires_gif(tmp_path, gradient_image):
    with pytest.raises(UnsupportedFormat):
        write_animation([gradient_image], tmp_path / "cycle.png")


def test_filename_with_flags():
    config = resolve_config(RenderConfig(max_iterations=500, threshold=4.0, zoom=2.5, offset_x=-0.75, offset_y=0.0))
    assert filename_with_flags("img/out.png", config) == "img/out#i=500_t=4_z=2.5_x=-0.75_y=0.png"
