"""CPU preview of a glyph buffer rendered against its MSDF atlas.

This mirrors what the instanced text shader does per fragment: sample the
atlas, take the median of the three distance channels and turn the signed
distance into coverage.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np
from PIL import Image

from .text_buffer import GlyphBuffer


def sdf_coverage(pixels: np.ndarray, smoothing: float = 0.1) -> np.ndarray:
    """Map ``(h, w, 3)`` distance samples in [0, 1] to coverage in [0, 1]."""
    signed_distance = np.median(pixels, axis=2) - 0.5
    return np.clip(signed_distance / smoothing + 0.5, 0.0, 1.0)


def _atlas_box(
    uv_offset: np.ndarray, uv_size: np.ndarray, atlas_size: Tuple[int, int]
) -> Tuple[int, int, int, int]:
    width, height = atlas_size
    left = uv_offset[0] * width
    # Undo the bottom-up flip of the UV rectangle.
    top = height * (1.0 - uv_offset[1] - uv_size[1])
    return (
        int(round(left)),
        int(round(top)),
        int(round(left + uv_size[0] * width)),
        int(round(top + uv_size[1] * height)),
    )


def render_preview(
    buffer: GlyphBuffer,
    atlas_image: Image.Image,
    pixels_per_unit: float = 100.0,
    padding: int = 16,
    smoothing: float = 0.1,
    background: int = 255,
) -> Image.Image:
    if not len(buffer):
        return Image.new("L", (padding * 2, padding * 2), color=background)

    atlas = atlas_image.convert("RGB")
    (min_x, min_y), (max_x, max_y) = buffer.bounds()
    width = int(math.ceil((max_x - min_x) * pixels_per_unit)) + padding * 2
    height = int(math.ceil((max_y - min_y) * pixels_per_unit)) + padding * 2
    canvas = Image.new("L", (width, height), color=background)

    for position, scale, uv_offset, uv_size in zip(
        buffer.positions, buffer.scales, buffer.uv_offsets, buffer.uv_sizes
    ):
        box = _atlas_box(uv_offset, uv_size, atlas.size)
        target_w = int(round(scale[0] * pixels_per_unit))
        target_h = int(round(scale[1] * pixels_per_unit))
        if box[2] <= box[0] or box[3] <= box[1] or target_w <= 0 or target_h <= 0:
            continue

        glyph = atlas.crop(box).resize((target_w, target_h), Image.BILINEAR)
        coverage = sdf_coverage(np.asarray(glyph, dtype=np.float32) / 255.0, smoothing)
        mask = Image.fromarray((coverage * 255).astype(np.uint8))

        # Layout space is y-up, image space is y-down.
        left = padding + int(round((position[0] - min_x) * pixels_per_unit))
        top = padding + int(round((max_y - position[1] - scale[1]) * pixels_per_unit))
        canvas.paste(0, (left, top), mask)

    return canvas
