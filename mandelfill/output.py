"""Encoding, post-processing and persistence of rendered images."""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Iterable, Union

import imageio.v2 as imageio
import numpy as np
import PIL.Image
import PIL.ImageEnhance

from .config import RenderConfig
from .errors import UnsupportedFormat

logger = logging.getLogger(__name__)

_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".gif": "GIF",
}

GIF_COLORS = 256


def pil_format_name(extension: str) -> str:
    """Map a file extension (with or without the dot) to a Pillow format name."""

    ext = extension.lower()
    if not ext.startswith("."):
        ext = "." + ext
    try:
        return _FORMATS[ext]
    except KeyError:
        raise UnsupportedFormat(extension) from None


def _enhance_factor(percentage: float) -> float:
    return 1.0 + max(-100.0, min(100.0, float(percentage))) / 100.0


def adjust_image(image: PIL.Image.Image, contrast: float = 0.0, brightness: float = 0.0) -> PIL.Image.Image:
    """Apply contrast and brightness changes given as percentages in ``[-100, 100]``.

    ``0`` leaves the channel untouched. The alpha channel is preserved.
    """

    if contrast == 0 and brightness == 0:
        return image

    alpha = image.getchannel("A") if image.mode == "RGBA" else None
    adjusted = image.convert("RGB")
    if contrast:
        adjusted = PIL.ImageEnhance.Contrast(adjusted).enhance(_enhance_factor(contrast))
    if brightness:
        adjusted = PIL.ImageEnhance.Brightness(adjusted).enhance(_enhance_factor(brightness))
    if alpha is not None:
        adjusted.putalpha(alpha)
    return adjusted


def _prepare(image: PIL.Image.Image, pil_format: str) -> PIL.Image.Image:
    if pil_format == "JPEG":
        return image.convert("RGB")
    if pil_format == "GIF":
        return image.convert("RGB").quantize(colors=GIF_COLORS)
    return image


def encode_image(image: PIL.Image.Image, extension: str, *, quality: int = 100) -> bytes:
    """Encode ``image`` into the byte stream of the format named by ``extension``."""

    pil_format = pil_format_name(extension)
    buffer = io.BytesIO()
    options = {"quality": quality} if pil_format == "JPEG" else {}
    _prepare(image, pil_format).save(buffer, format=pil_format, **options)
    return buffer.getvalue()


def save_image(image: PIL.Image.Image, output_path: Union[str, Path], *, quality: int = 100) -> Path:
    """Write ``image`` to ``output_path``; the format follows the file extension."""

    output_path = Path(output_path)
    pil_format = pil_format_name(output_path.suffix)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if pil_format == "GIF":
        imageio.imwrite(str(output_path), np.asarray(image.convert("RGB")))
    else:
        options = {"quality": quality} if pil_format == "JPEG" else {}
        _prepare(image, pil_format).save(str(output_path), format=pil_format, **options)
    logger.info("Saved image to %s", output_path)
    return output_path


def write_animation(images: Iterable[PIL.Image.Image], output_path: Union[str, Path], *, duration: float = 0.1) -> Path:
    """Write ``images`` as a looping GIF animation."""

    output_path = Path(output_path)
    if pil_format_name(output_path.suffix) != "GIF":
        raise UnsupportedFormat(f"{output_path.suffix} (animations require .gif)")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with imageio.get_writer(str(output_path), mode="I", duration=duration, loop=0) as writer:
        for image in images:
            writer.append_data(np.asarray(image.convert("RGB")))
    logger.info("Saved animation to %s", output_path)
    return output_path


def _format_flag(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def filename_flags(config: RenderConfig) -> str:
    return "_".join(
        [
            f"i={config.max_iterations}",
            f"t={_format_flag(config.threshold)}",
            f"z={_format_flag(config.zoom)}",
            f"x={_format_flag(config.offset_x)}",
            f"y={_format_flag(config.offset_y)}",
        ]
    )


def filename_with_flags(filename: Union[str, Path], config: RenderConfig) -> str:
    """Insert the render parameters before the extension: ``out#i=..._y=0.png``."""

    stem, ext = os.path.splitext(str(filename))
    return f"{stem}#{filename_flags(config)}{ext}"
