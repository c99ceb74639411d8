# pixelcrush/settings.py
from __future__ import annotations

"""
Caller-side configuration: clamp numbers, normalise mode names.

The core trusts its inputs; everything a user can type passes through here
first.

Exports:
- DitherSettings (frozen dataclass)
- clamp_pixel_size(value) -> int
- clamp_colour_count(value) -> int
- normalise_algorithm(name) -> DitherMode
- normalise_palette_mode(name) -> PaletteMode
- make_settings(...) -> DitherSettings
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from .constants import (
    COLOUR_COUNT_MAX,
    COLOUR_COUNT_MIN,
    DEFAULT_ALGORITHM,
    DEFAULT_PALETTE,
    DEFAULT_PALETTE_MODE,
    DEFAULT_PIXEL_SIZE,
    PIXEL_SIZE_MAX,
    PIXEL_SIZE_MIN,
)
from .core_types import (
    DITHER_MODES,
    PALETTE_MODES,
    DitherMode,
    HexStr,
    PaletteMode,
    clamp_value,
    round_half_up,
)
from .palette_data import normalise_hex


@dataclass(frozen=True)
class DitherSettings:
    """One pipeline configuration. Build it with make_settings() to get clamping."""

    pixel_size: int = DEFAULT_PIXEL_SIZE
    algorithm: DitherMode = DEFAULT_ALGORITHM  # type: ignore[assignment]
    palette_mode: PaletteMode = DEFAULT_PALETTE_MODE  # type: ignore[assignment]
    palette: List[HexStr] = field(default_factory=lambda: list(DEFAULT_PALETTE))

    def with_palette(self, palette: Sequence[HexStr]) -> "DitherSettings":
        """Copy with a new palette; an empty palette keeps the current one."""
        cleaned = [normalise_hex(p) for p in palette]
        return replace(self, palette=cleaned or list(self.palette))


def clamp_pixel_size(value: float) -> int:
    return int(clamp_value(round_half_up(float(value)), PIXEL_SIZE_MIN, PIXEL_SIZE_MAX))


def clamp_colour_count(value: float) -> int:
    return int(
        clamp_value(round_half_up(float(value)), COLOUR_COUNT_MIN, COLOUR_COUNT_MAX)
    )


def _canon(name: str) -> str:
    return name.strip().lower().replace("_", "-").replace(" ", "-")


def normalise_algorithm(name: str) -> DitherMode:
    """'floyd_steinberg', 'Floyd-Steinberg', 'fs', 'bayer' ... -> canonical name."""
    key = _canon(name)
    aliases = {"fs": "floyd-steinberg", "floyd": "floyd-steinberg", "bayer": "ordered"}
    key = aliases.get(key, key)
    if key not in DITHER_MODES:
        raise ValueError(
            f"unknown algorithm {name!r}; expected one of {', '.join(DITHER_MODES)}"
        )
    return key  # type: ignore[return-value]


def normalise_palette_mode(name: str) -> PaletteMode:
    key = _canon(name)
    aliases = {"horizontal": "gradient-horizontal", "vertical": "gradient-vertical"}
    key = aliases.get(key, key)
    if key not in PALETTE_MODES:
        raise ValueError(
            f"unknown palette mode {name!r}; expected one of {', '.join(PALETTE_MODES)}"
        )
    return key  # type: ignore[return-value]


def make_settings(
    pixel_size: float = DEFAULT_PIXEL_SIZE,
    algorithm: str = DEFAULT_ALGORITHM,
    palette_mode: str = DEFAULT_PALETTE_MODE,
    palette: Optional[Sequence[HexStr]] = None,
) -> DitherSettings:
    """Validated settings. A missing or empty palette falls back to the default."""
    cleaned = [normalise_hex(p) for p in (palette or [])]
    return DitherSettings(
        pixel_size=clamp_pixel_size(pixel_size),
        algorithm=normalise_algorithm(algorithm),
        palette_mode=normalise_palette_mode(palette_mode),
        palette=cleaned or list(DEFAULT_PALETTE),
    )


__all__ = [
    "DitherSettings",
    "clamp_pixel_size",
    "clamp_colour_count",
    "normalise_algorithm",
    "normalise_palette_mode",
    "make_settings",
]
