# pixelcrush/palette_data.py
from __future__ import annotations

"""
Palette definitions and editing helpers.

Exports:
  PALETTES: dict[str, list[str]]  # name -> ["#rrggbb", ...], dark -> light where it matters
  resolve_palette(spec) -> list[str]
    Accepts a built-in name or a comma-separated hex list.
  add_colour / remove_colour / replace_colour / move_colour
    Pure list edits. They never mutate their input and never empty a palette.
"""

from typing import Dict, List, Sequence

from .constants import DEFAULT_PALETTE
from .core_types import HexStr, parse_hex, rgb_to_hex


PALETTES: Dict[str, List[HexStr]] = {
    "default": list(DEFAULT_PALETTE),
    "pico8": [
        "#000000", "#1d2b53", "#7e2553", "#008751",
        "#ab5236", "#5f574f", "#c2c3c7", "#fff1e8",
        "#ff004d", "#ffa300", "#ffec27", "#00e436",
        "#29adff", "#83769c", "#ff77a8", "#ffccaa",
    ],
    "gameboy": ["#0f380f", "#306230", "#8bac0f", "#9bbc0f"],
    "hollow": ["#0f0f1b", "#565a75", "#c6b7be", "#fafbf6"],
    "twilight5": ["#292831", "#333f58", "#4a7a96", "#ee8695", "#fbbbad"],
    "sunset8": [
        "#464678", "#9a6390", "#e67595", "#ff8b6f",
        "#ffa936", "#ffc247", "#ffd647", "#ffff78",
    ],
    "mono": ["#000000", "#ffffff"],
}


def normalise_hex(value: str) -> HexStr:
    """Canonical '#rrggbb' form; malformed input becomes '#000000'."""
    return rgb_to_hex(parse_hex(value.strip()))


def resolve_palette(spec: str) -> List[HexStr]:
    """
    Built-in palette by name (case-insensitive), else a comma-separated list of
    hex colours. Raises ValueError when nothing usable is left.
    """
    key = spec.strip().lower()
    if key in PALETTES:
        return list(PALETTES[key])
    entries = [part for part in (p.strip() for p in spec.split(",")) if part]
    if not entries:
        raise ValueError(f"empty palette: {spec!r}")
    return [normalise_hex(p) for p in entries]


def add_colour(palette: Sequence[HexStr], colour: HexStr) -> List[HexStr]:
    """Append colour unless already present."""
    hx = normalise_hex(colour)
    current = [normalise_hex(c) for c in palette]
    if hx in current:
        return current
    return current + [hx]


def remove_colour(palette: Sequence[HexStr], index: int) -> List[HexStr]:
    """Drop the entry at index; the last remaining colour is never removed."""
    current = list(palette)
    if len(current) <= 1 or not 0 <= index < len(current):
        return current
    return current[:index] + current[index + 1 :]


def replace_colour(
    palette: Sequence[HexStr], index: int, colour: HexStr
) -> List[HexStr]:
    current = list(palette)
    if 0 <= index < len(current):
        current[index] = normalise_hex(colour)
    return current


def move_colour(palette: Sequence[HexStr], src: int, dst: int) -> List[HexStr]:
    """Move one entry to a new position (order drives luminance/gradient modes)."""
    current = list(palette)
    if src == dst or not 0 <= src < len(current) or not 0 <= dst < len(current):
        return current
    item = current.pop(src)
    current.insert(dst, item)
    return current


__all__ = [
    "PALETTES",
    "normalise_hex",
    "resolve_palette",
    "add_colour",
    "remove_colour",
    "replace_colour",
    "move_colour",
]
