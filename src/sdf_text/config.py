"""Runtime settings read from the environment (and a local ``.env``)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from .controls import OrbitConfig
from .text_buffer import DEFAULT_SCALE_CORRECTION

ENV_PREFIX = "SDF_TEXT_"


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None


def _read_log_level(environ: Mapping[str, str], default: str) -> str:
    raw = environ.get(ENV_PREFIX + "LOG_LEVEL")
    if raw is None or raw.strip() == "":
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be a logging level name, got {raw!r}")
    return level


@dataclass(frozen=True)
class Settings:
    scale_correction: float = DEFAULT_SCALE_CORRECTION
    damping: float = 0.1
    pixels_per_unit: float = 100.0
    http_timeout: float = 30.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(
            scale_correction=_read_float(environ, "SCALE_CORRECTION", cls.scale_correction),
            damping=_read_float(environ, "DAMPING", cls.damping),
            pixels_per_unit=_read_float(environ, "PIXELS_PER_UNIT", cls.pixels_per_unit),
            http_timeout=_read_float(environ, "HTTP_TIMEOUT", cls.http_timeout),
            log_level=_read_log_level(environ, cls.log_level),
        )

    def orbit_config(self, **overrides) -> OrbitConfig:
        return OrbitConfig(damping=self.damping, **overrides)
