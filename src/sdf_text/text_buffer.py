"""Packs laid-out paragraphs into one instanced glyph buffer.

Every resolved character becomes one instance: a 2D placement (translation
and scale, z flattened) plus the UV rectangle of its glyph in the atlas.
Instances are ordered by paragraph, then line, then character; callers may
rely on that order to map buffer indices back to the source text.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Tuple

import numpy as np

from .font_atlas import FontAtlas
from .layout import count_resolved, measure_paragraph

logger = logging.getLogger(__name__)

DEFAULT_SCALE_CORRECTION = 0.05


class Align(str, enum.Enum):
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class Paragraph:
    lines: Tuple[str, ...]
    anchor: Tuple[float, float] = (0.0, 0.0)
    align: Align = Align.LEFT

    def __post_init__(self) -> None:
        if isinstance(self.lines, str):
            raise TypeError("Paragraph.lines must be a sequence of strings; use Paragraph.from_text")
        lines = tuple(self.lines)
        for index, line in enumerate(lines):
            if not isinstance(line, str):
                raise TypeError(f"line {index} is {type(line).__name__}, expected str")
            if "\n" in line or "\r" in line:
                raise ValueError(f"line {index} contains a line break")

        anchor = tuple(float(value) for value in self.anchor)
        if len(anchor) != 2:
            raise ValueError(f"anchor must have two components, got {len(anchor)}")

        object.__setattr__(self, "lines", lines)
        object.__setattr__(self, "anchor", anchor)
        object.__setattr__(self, "align", Align(self.align))

    @classmethod
    def from_text(
        cls,
        text: str,
        anchor: Tuple[float, float] = (0.0, 0.0),
        align: Align | str = Align.LEFT,
    ) -> Paragraph:
        return cls(lines=tuple(text.splitlines()), anchor=anchor, align=align)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Paragraph:
        if not isinstance(payload, Mapping):
            raise TypeError(f"paragraph must be a mapping, got {type(payload).__name__}")
        if "lines" in payload:
            lines = payload["lines"]
            if isinstance(lines, str):
                lines = lines.splitlines()
        elif "text" in payload:
            lines = str(payload["text"]).splitlines()
        else:
            raise ValueError("paragraph is missing required field 'lines'")
        anchor = payload.get("anchor", (0.0, 0.0))
        if isinstance(anchor, Mapping):
            anchor = (anchor.get("x", 0.0), anchor.get("y", 0.0))
        return cls(
            lines=tuple(lines),
            anchor=tuple(anchor),
            align=payload.get("align", Align.LEFT),
        )


@dataclass(frozen=True)
class UnresolvedChar:
    char: str
    paragraph: int
    line: int
    column: int


@dataclass(frozen=True, eq=False)
class GlyphBuffer:
    """Per-instance glyph data, one row per rendered character.

    All arrays are ``float32`` with shape ``(n, 2)`` and are read-only.
    """

    positions: np.ndarray
    scales: np.ndarray
    uv_offsets: np.ndarray
    uv_sizes: np.ndarray
    unresolved: Tuple[UnresolvedChar, ...] = ()

    def __post_init__(self) -> None:
        for array in (self.positions, self.scales, self.uv_offsets, self.uv_sizes):
            array.flags.writeable = False

    @classmethod
    def allocate(cls, count: int) -> Dict[str, np.ndarray]:
        return {
            name: np.zeros((count, 2), dtype=np.float32)
            for name in ("positions", "scales", "uv_offsets", "uv_sizes")
        }

    @classmethod
    def empty(cls) -> GlyphBuffer:
        return cls(**cls.allocate(0))

    def __len__(self) -> int:
        return len(self.positions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GlyphBuffer):
            return NotImplemented
        return (
            np.array_equal(self.positions, other.positions)
            and np.array_equal(self.scales, other.scales)
            and np.array_equal(self.uv_offsets, other.uv_offsets)
            and np.array_equal(self.uv_sizes, other.uv_sizes)
            and self.unresolved == other.unresolved
        )

    def instance_matrices(self) -> np.ndarray:
        """Return ``(n, 4, 4)`` affine transforms for an instanced draw."""
        matrices = np.zeros((len(self), 4, 4), dtype=np.float32)
        matrices[:, 0, 0] = self.scales[:, 0]
        matrices[:, 1, 1] = self.scales[:, 1]
        matrices[:, 2, 2] = 1.0
        matrices[:, 3, 3] = 1.0
        matrices[:, 0, 3] = self.positions[:, 0]
        matrices[:, 1, 3] = self.positions[:, 1]
        return matrices

    def bounds(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Return ``((min_x, min_y), (max_x, max_y))`` of all glyph quads."""
        if not len(self):
            return (0.0, 0.0), (0.0, 0.0)
        lower = self.positions.min(axis=0)
        upper = (self.positions + self.scales).max(axis=0)
        return (float(lower[0]), float(lower[1])), (float(upper[0]), float(upper[1]))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": len(self),
            "positions": self.positions.tolist(),
            "scales": self.scales.tolist(),
            "uv_offsets": self.uv_offsets.tolist(),
            "uv_sizes": self.uv_sizes.tolist(),
            "unresolved": [
                {
                    "char": entry.char,
                    "paragraph": entry.paragraph,
                    "line": entry.line,
                    "column": entry.column,
                }
                for entry in self.unresolved
            ],
        }


def _as_paragraphs(paragraphs: Iterable[Paragraph | Mapping[str, Any]]) -> List[Paragraph]:
    result: List[Paragraph] = []
    for paragraph in paragraphs:
        if isinstance(paragraph, Paragraph):
            result.append(paragraph)
        else:
            result.append(Paragraph.from_dict(paragraph))
    return result


def build_text_buffer(
    paragraphs: Sequence[Paragraph | Mapping[str, Any]],
    atlas: FontAtlas,
    scale_correction: float = DEFAULT_SCALE_CORRECTION,
    on_unresolved: Callable[[UnresolvedChar], None] | None = None,
) -> GlyphBuffer:
    if scale_correction <= 0:
        raise ValueError(f"scale_correction must be positive, got {scale_correction}")

    paragraphs = _as_paragraphs(paragraphs)

    total = sum(count_resolved(paragraph.lines, atlas) for paragraph in paragraphs)
    if total and (atlas.scale_w <= 0 or atlas.scale_h <= 0):
        raise ValueError(
            f"font atlas has invalid dimensions {atlas.scale_w}x{atlas.scale_h}; "
            "'common.scaleW' and 'common.scaleH' are required"
        )

    arrays = GlyphBuffer.allocate(total)
    positions = arrays["positions"]
    scales = arrays["scales"]
    uv_offsets = arrays["uv_offsets"]
    uv_sizes = arrays["uv_sizes"]
    unresolved: List[UnresolvedChar] = []
    index = 0

    for paragraph_index, paragraph in enumerate(paragraphs):
        metrics = measure_paragraph(paragraph.lines, atlas, scale_correction)
        for line_index, column, char in metrics.unresolved:
            entry = UnresolvedChar(char=char, paragraph=paragraph_index, line=line_index, column=column)
            unresolved.append(entry)
            if on_unresolved is not None:
                on_unresolved(entry)

        anchor_x, anchor_y = paragraph.anchor
        pen_y = anchor_y + metrics.height / 2

        for line in metrics.lines:
            if paragraph.align is Align.CENTER:
                pen_x = anchor_x - line.advance_width / 2
            else:
                pen_x = anchor_x - metrics.width / 2

            for placed in line.glyphs:
                glyph = placed.glyph
                positions[index] = (pen_x + placed.x, pen_y + placed.y)
                scales[index] = (glyph.width * scale_correction, glyph.height * scale_correction)
                # Atlas rows run top-down, UVs bottom-up.
                uv_offsets[index] = (
                    glyph.x / atlas.scale_w,
                    (atlas.scale_h - glyph.y - glyph.height) / atlas.scale_h,
                )
                uv_sizes[index] = (glyph.width / atlas.scale_w, glyph.height / atlas.scale_h)
                index += 1

            pen_y -= atlas.line_height * scale_correction

    logger.debug(
        "Built glyph buffer: %d glyphs from %d paragraphs, %d unresolved",
        total,
        len(paragraphs),
        len(unresolved),
    )
    return GlyphBuffer(unresolved=tuple(unresolved), **arrays)


class TextBufferBuilder:
    """Binds an atlas and layout options for repeated builds."""

    def __init__(
        self,
        atlas: FontAtlas,
        scale_correction: float = DEFAULT_SCALE_CORRECTION,
        on_unresolved: Callable[[UnresolvedChar], None] | None = None,
    ):
        self.atlas = atlas
        self.scale_correction = scale_correction
        self.on_unresolved = on_unresolved

    def build(self, paragraphs: Sequence[Paragraph | Mapping[str, Any]]) -> GlyphBuffer:
        return build_text_buffer(
            paragraphs,
            self.atlas,
            scale_correction=self.scale_correction,
            on_unresolved=self.on_unresolved,
        )
