"""Bitmap-font (BMFont / msdf-bmfont JSON) atlas descriptions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Tuple


@dataclass(frozen=True)
class Glyph:
    id: int
    char: str
    width: float
    height: float
    xoffset: float
    yoffset: float
    xadvance: float
    x: float
    y: float
    page: int = 0
    chnl: int = 0

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Glyph:
        return cls(
            id=int(payload.get("id", 0)),
            char=str(payload.get("char", "")),
            width=float(payload.get("width", 0)),
            height=float(payload.get("height", 0)),
            xoffset=float(payload.get("xoffset", 0)),
            yoffset=float(payload.get("yoffset", 0)),
            xadvance=float(payload.get("xadvance", 0)),
            x=float(payload.get("x", 0)),
            y=float(payload.get("y", 0)),
            page=int(payload.get("page", 0)),
            chnl=int(payload.get("chnl", 0)),
        )


@dataclass(frozen=True)
class KerningPair:
    first: int
    second: int
    amount: float


def iter_glyphs(description: Mapping[str, Any]) -> Iterator[Glyph]:
    for payload in description.get("chars") or ():
        if not isinstance(payload, Mapping):
            continue
        yield Glyph.from_dict(payload)


def iter_kernings(description: Mapping[str, Any]) -> Iterator[KerningPair]:
    for payload in description.get("kernings") or ():
        if not isinstance(payload, Mapping):
            continue
        yield KerningPair(
            first=int(payload.get("first", 0)),
            second=int(payload.get("second", 0)),
            amount=float(payload.get("amount", 0)),
        )


@dataclass(frozen=True, eq=False)
class FontAtlas:
    """Read-only view over a parsed font description.

    Glyphs are keyed by character; when a character appears more than once
    in the description the first entry wins. The same holds for duplicate
    kerning pairs.

    The description is assumed to be well-formed decoded JSON. Missing
    fields become zero or empty, wrongly typed field values are not guarded.
    """

    glyphs: Mapping[str, Glyph]
    kernings: Tuple[KerningPair, ...] = ()
    scale_w: float = 0.0
    scale_h: float = 0.0
    line_height: float = 0.0
    base: float = 0.0
    _kerning_index: Mapping[Tuple[int, int], float] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index: Dict[Tuple[int, int], float] = {}
        for pair in self.kernings:
            index.setdefault((pair.first, pair.second), pair.amount)
        object.__setattr__(self, "_kerning_index", MappingProxyType(index))

    @classmethod
    def parse(cls, description: Mapping[str, Any]) -> FontAtlas:
        if not isinstance(description, Mapping):
            raise TypeError(
                f"font description must be a mapping, got {type(description).__name__}"
            )

        common = description.get("common") or {}

        glyphs: Dict[str, Glyph] = {}
        for glyph in iter_glyphs(description):
            glyphs.setdefault(glyph.char, glyph)

        return cls(
            glyphs=MappingProxyType(glyphs),
            kernings=tuple(iter_kernings(description)),
            scale_w=float(common.get("scaleW", 0)),
            scale_h=float(common.get("scaleH", 0)),
            line_height=float(common.get("lineHeight", 0)),
            base=float(common.get("base", 0)),
        )

    def lookup_glyph(self, char: str) -> Glyph | None:
        return self.glyphs.get(char)

    def lookup_kerning(self, left_id: int, right_id: int) -> float:
        return self._kerning_index.get((left_id, right_id), 0.0)

    def __contains__(self, char: object) -> bool:
        return char in self.glyphs

    def __len__(self) -> int:
        return len(self.glyphs)


def parse_font(description: Mapping[str, Any]) -> FontAtlas:
    """Build a FontAtlas from a decoded font description."""
    return FontAtlas.parse(description)
