"""Shared fixtures: a tiny two-glyph font with one kerning pair."""

import copy

import pytest

from sdf_text import FontAtlas

FONT_DESCRIPTION = {
    "common": {"lineHeight": 16, "base": 12, "scaleW": 64, "scaleH": 32},
    "chars": [
        {
            "id": 65,
            "char": "A",
            "width": 8,
            "height": 8,
            "xoffset": 0,
            "yoffset": 0,
            "xadvance": 10,
            "x": 0,
            "y": 0,
            "page": 0,
            "chnl": 15,
        },
        {
            "id": 66,
            "char": "B",
            "width": 9,
            "height": 9,
            "xoffset": 0,
            "yoffset": 0,
            "xadvance": 12,
            "x": 10,
            "y": 0,
            "page": 0,
            "chnl": 15,
        },
    ],
    "kernings": [{"first": 65, "second": 66, "amount": -2}],
}


@pytest.fixture
def font_description():
    return copy.deepcopy(FONT_DESCRIPTION)


@pytest.fixture
def atlas(font_description):
    return FontAtlas.parse(font_description)
