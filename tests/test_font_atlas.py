"""Tests for font description parsing."""

import pytest

from sdf_text import FontAtlas, KerningPair, parse_font


class TestParse:
    def test_common_metrics(self, atlas):
        assert atlas.scale_w == 64
        assert atlas.scale_h == 32
        assert atlas.line_height == 16
        assert atlas.base == 12
        assert len(atlas) == 2

    def test_glyph_fields(self, atlas):
        glyph = atlas.lookup_glyph("B")
        assert glyph.id == 66
        assert glyph.xadvance == 12
        assert (glyph.x, glyph.y, glyph.width, glyph.height) == (10, 0, 9, 9)
        assert glyph.chnl == 15

    def test_unknown_glyph(self, atlas):
        assert atlas.lookup_glyph("?") is None
        assert "?" not in atlas
        assert "A" in atlas

    def test_first_duplicate_char_wins(self, font_description):
        duplicate = dict(font_description["chars"][0], id=999, xadvance=99)
        font_description["chars"].append(duplicate)
        atlas = parse_font(font_description)
        assert atlas.lookup_glyph("A").id == 65
        assert len(atlas) == 2

    def test_missing_fields_default_to_empty(self):
        atlas = FontAtlas.parse({})
        assert len(atlas) == 0
        assert atlas.kernings == ()
        assert (atlas.scale_w, atlas.scale_h, atlas.line_height, atlas.base) == (0, 0, 0, 0)

    def test_missing_glyph_fields_default_to_zero(self):
        atlas = FontAtlas.parse({"chars": [{"id": 1, "char": "x"}]})
        glyph = atlas.lookup_glyph("x")
        assert glyph.width == 0
        assert glyph.xadvance == 0

    def test_atlas_is_hashable(self, atlas, font_description):
        cache = {atlas: "shared"}
        assert cache[atlas] == "shared"
        assert hash(atlas) == hash(atlas)
        assert FontAtlas.parse(font_description) not in cache

    def test_non_mapping_rejected(self):
        with pytest.raises(TypeError, match="mapping"):
            FontAtlas.parse(["not", "a", "font"])


class TestKerning:
    def test_known_pair(self, atlas):
        assert atlas.lookup_kerning(65, 66) == -2

    def test_pair_is_ordered(self, atlas):
        assert atlas.lookup_kerning(66, 65) == 0

    def test_first_duplicate_pair_wins(self, font_description):
        font_description["kernings"].append({"first": 65, "second": 66, "amount": -7})
        atlas = parse_font(font_description)
        assert atlas.lookup_kerning(65, 66) == -2
        assert len(atlas.kernings) == 2

    def test_direct_construction_indexes_kernings(self):
        atlas = FontAtlas(glyphs={}, kernings=(KerningPair(1, 2, 3.0),))
        assert atlas.lookup_kerning(1, 2) == 3.0
