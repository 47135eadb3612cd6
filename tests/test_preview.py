"""Tests for the CPU preview rasteriser."""

import numpy as np
import pytest
from PIL import Image

from sdf_text import GlyphBuffer, Paragraph, build_text_buffer
from sdf_text.preview import render_preview, sdf_coverage


@pytest.fixture
def atlas_image():
    """Atlas where A's cell is fully inside the shape and B's fully outside."""
    image = Image.new("RGB", (64, 32), color=(0, 0, 0))
    image.paste((255, 255, 255), (0, 0, 8, 8))
    return image


def test_sdf_coverage():
    pixels = np.array([[[1.0, 1.0, 1.0], [0.0, 0.0, 0.0], [0.5, 0.5, 0.5], [1.0, 0.0, 1.0]]])
    np.testing.assert_allclose(sdf_coverage(pixels), [[1.0, 0.0, 0.5, 1.0]])


def test_renders_inside_glyph_only(atlas, atlas_image):
    buffer = build_text_buffer([Paragraph(["AB"])], atlas, scale_correction=1.0)
    image = render_preview(buffer, atlas_image, pixels_per_unit=1.0, padding=16)
    # Bounds are x in [-10, 7] and y in [15, 24].
    assert image.size == (17 + 32, 9 + 32)
    pixels = np.asarray(image)
    assert np.count_nonzero(pixels == 0) == 64
    assert (pixels[16:24, 16:24] == 0).all()


def test_empty_buffer(atlas_image):
    image = render_preview(GlyphBuffer.empty(), atlas_image, padding=4)
    assert image.size == (8, 8)
    assert np.asarray(image).min() == 255
