"""Per-paragraph glyph measurement.

Lines are measured completely before anything is emitted, because the
alignment step needs every line's final width to position its glyphs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import List, Tuple

from .font_atlas import FontAtlas, Glyph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedGlyph:
    glyph: Glyph
    column: int
    x: float  # from the line's start
    y: float  # from the line's top


@dataclass(frozen=True)
class LineLayout:
    glyphs: Tuple[PlacedGlyph, ...]
    advance_width: float
    y: float


@dataclass(frozen=True)
class ParagraphMetrics:
    lines: Tuple[LineLayout, ...]
    width: float
    height: float
    unresolved: Tuple[Tuple[int, int, str], ...] = ()

    @property
    def glyph_count(self) -> int:
        return sum(len(line.glyphs) for line in self.lines)


def _check_lines(lines: Sequence[str]) -> None:
    if isinstance(lines, str):
        raise TypeError("lines must be a sequence of strings, not a single string")


def count_resolved(lines: Sequence[str], atlas: FontAtlas) -> int:
    _check_lines(lines)
    return sum(1 for line in lines for char in line if char in atlas)


def measure_paragraph(
    lines: Sequence[str],
    atlas: FontAtlas,
    scale_correction: float,
) -> ParagraphMetrics:
    _check_lines(lines)

    line_height = atlas.line_height * scale_correction
    cursor_y = 0.0
    width = 0.0
    laid_out: List[LineLayout] = []
    unresolved: List[Tuple[int, int, str]] = []

    for line_index, text in enumerate(lines):
        pen_x = 0.0
        previous: Glyph | None = None
        placed: List[PlacedGlyph] = []

        for column, char in enumerate(text):
            glyph = atlas.lookup_glyph(char)
            if glyph is None:
                logger.warning("Unknown char %r at line %d, column %d", char, line_index, column)
                unresolved.append((line_index, column, char))
                continue

            # Kerning never crosses a line break: previous is reset per line.
            kerning = atlas.lookup_kerning(previous.id, glyph.id) if previous is not None else 0.0
            placed.append(
                PlacedGlyph(
                    glyph=glyph,
                    column=column,
                    x=pen_x + (glyph.xoffset + kerning) * scale_correction,
                    y=((atlas.line_height - glyph.height) - glyph.yoffset) * scale_correction,
                )
            )
            pen_x += (glyph.xadvance + kerning) * scale_correction
            previous = glyph

        laid_out.append(LineLayout(glyphs=tuple(placed), advance_width=pen_x, y=cursor_y))
        width = max(width, pen_x)
        cursor_y -= line_height

    return ParagraphMetrics(
        lines=tuple(laid_out),
        width=width,
        height=abs(cursor_y),
        unresolved=tuple(unresolved),
    )
