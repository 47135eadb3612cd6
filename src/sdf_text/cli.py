"""CLI entry point: lay out text and dump the glyph buffer."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .config import Settings
from .loader import load_atlas_image, load_font, load_layout, load_text
from .preview import render_preview
from .text_buffer import Align, Paragraph, build_text_buffer

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Lay out text with a bitmap-font atlas into an instanced glyph buffer."
    )
    parser.add_argument(
        "--font",
        required=True,
        help="Path or URL of the font description JSON (common, chars, kernings).",
    )
    parser.add_argument(
        "--atlas",
        help="Path or URL of the atlas image. When given, a preview.png is rendered.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--layout",
        help="JSON file with a list of paragraphs ({lines, anchor, align}).",
    )
    source.add_argument(
        "--text",
        help="Plain text file laid out as a single paragraph at the origin.",
    )
    parser.add_argument(
        "--output-dir",
        required=True,
        help="Directory to write glyphs.json and preview.png.",
    )
    parser.add_argument(
        "--align",
        choices=[align.value for align in Align],
        default=Align.LEFT.value,
        help="Alignment used with --text.",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Scale correction from font pixels to layout units.",
    )
    parser.add_argument(
        "--pixels-per-unit",
        type=float,
        default=None,
        help="Preview resolution in pixels per layout unit.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the layout from CLI arguments and print a JSON summary."""
    args = parse_args(argv)
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    scale = args.scale if args.scale is not None else settings.scale_correction
    pixels_per_unit = (
        args.pixels_per_unit if args.pixels_per_unit is not None else settings.pixels_per_unit
    )

    atlas = load_font(args.font, timeout=settings.http_timeout)
    if args.layout:
        paragraphs = load_layout(args.layout, timeout=settings.http_timeout)
    else:
        text = load_text(args.text, timeout=settings.http_timeout)
        paragraphs = [Paragraph.from_text(text, align=args.align)]

    buffer = build_text_buffer(paragraphs, atlas, scale_correction=scale)

    output_dir = Path(args.output_dir).expanduser().resolve()
    output_dir.mkdir(parents=True, exist_ok=True)
    glyphs_path = output_dir / "glyphs.json"
    dump = buffer.to_dict()
    glyphs_path.write_text(json.dumps(dump), encoding="utf-8")
    logger.info("Wrote %d glyphs to %s", len(buffer), glyphs_path)

    preview_path = None
    if args.atlas:
        image = load_atlas_image(args.atlas, timeout=settings.http_timeout)
        preview_path = output_dir / "preview.png"
        render_preview(buffer, image, pixels_per_unit=pixels_per_unit).save(preview_path)

    unresolved: List[Dict[str, Any]] = dump["unresolved"]
    summary = {
        "font": str(args.font),
        "paragraphs": len(paragraphs),
        "glyphs": len(buffer),
        "unresolved": unresolved,
        "scale_correction": scale,
        "glyphs_path": str(glyphs_path),
        "preview_path": str(preview_path) if preview_path else None,
    }

    print(json.dumps(summary))


if __name__ == "__main__":
    main()
