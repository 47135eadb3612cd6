"""Bitmap-font text layout into instanced glyph buffers, plus damped camera controls."""

from .controls import FPSControls, FPSInput, OrbitConfig, OrbitControls, OrbitInput
from .convergence import DampedValue, clamp
from .font_atlas import FontAtlas, Glyph, KerningPair, parse_font
from .layout import LineLayout, ParagraphMetrics, PlacedGlyph, count_resolved, measure_paragraph
from .text_buffer import (
    Align,
    GlyphBuffer,
    Paragraph,
    TextBufferBuilder,
    UnresolvedChar,
    build_text_buffer,
)

__all__ = [
    "Align",
    "DampedValue",
    "FPSControls",
    "FPSInput",
    "FontAtlas",
    "Glyph",
    "GlyphBuffer",
    "KerningPair",
    "LineLayout",
    "OrbitConfig",
    "OrbitControls",
    "OrbitInput",
    "Paragraph",
    "ParagraphMetrics",
    "PlacedGlyph",
    "TextBufferBuilder",
    "UnresolvedChar",
    "build_text_buffer",
    "clamp",
    "count_resolved",
    "measure_paragraph",
    "parse_font",
]

__version__ = "0.1.0"
