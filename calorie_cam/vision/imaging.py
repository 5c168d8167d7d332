# -*- coding: utf-8 -*-
"""Vision — downsample a captured still and encode it for transfer."""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from ..errors import CaptureError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WIDTH = 800


@dataclass(frozen=True)
class EncodedImage:
    content: str  # base64, no data-url prefix
    width: int
    height: int
    mime: str = "image/jpeg"


def _to_rgb(img: Image.Image) -> Image.Image:
    # Flatten transparency onto white so JPEG encoding keeps the visible pixels.
    if img.mode in ("RGBA", "LA", "P"):
        if img.mode == "P":
            img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def downsample_image(image_bytes: bytes, max_width: int = DEFAULT_MAX_WIDTH, quality: int = 85) -> EncodedImage:
    """Shrink to at most ``max_width`` pixels wide (aspect kept, never upscaled) and JPEG-encode."""
    if not image_bytes:
        raise CaptureError("Captured image is empty")
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img = ImageOps.exif_transpose(img)
        img = _to_rgb(img)
        if img.width > max_width:
            height = max(1, round(img.height * max_width / img.width))
            img = img.resize((max_width, height), Image.Resampling.LANCZOS)
        output = io.BytesIO()
        img.save(output, format="JPEG", quality=quality, optimize=True)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        logger.error("could not decode captured image: %s", exc)
        raise CaptureError("Invalid image format or corrupted file") from exc

    return EncodedImage(
        content=base64.b64encode(output.getvalue()).decode("ascii"),
        width=img.width,
        height=img.height,
    )
