"""Loading fonts, atlas images, text and layouts from paths or URLs."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import requests
from PIL import Image

from .font_atlas import FontAtlas
from .text_buffer import Paragraph

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_fonts: Dict[str, FontAtlas] = {}


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _fetch(url: str, timeout: float) -> requests.Response:
    logger.debug("Fetching %s", url)
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response


def _local_path(source: str | Path) -> Path:
    path = Path(source).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"missing file at {path}")
    return path


def load_text(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> str:
    if is_url(source):
        return _fetch(source, timeout).text
    return _local_path(source).read_text(encoding="utf-8")


def load_json(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> Any:
    if is_url(source):
        return _fetch(source, timeout).json()
    return json.loads(_local_path(source).read_text(encoding="utf-8"))


def load_font(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> FontAtlas:
    """Load and parse a font description, caching it per source."""
    key = str(source)
    atlas = _fonts.get(key)
    if atlas is None:
        atlas = FontAtlas.parse(load_json(source, timeout))
        _fonts[key] = atlas
    return atlas


def clear_font_cache() -> None:
    _fonts.clear()


def load_atlas_image(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> Image.Image:
    if is_url(source):
        image = Image.open(io.BytesIO(_fetch(source, timeout).content))
    else:
        image = Image.open(_local_path(source))
    return image.convert("RGB")


def load_layout(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> List[Paragraph]:
    data = load_json(source, timeout)
    if isinstance(data, dict):
        data = data.get("paragraphs")
    if not isinstance(data, list):
        raise ValueError(f"Unexpected layout format in {source}: expected a list of paragraphs")
    return [Paragraph.from_dict(entry) for entry in data]
