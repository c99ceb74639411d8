# pixelcrush/core_types.py
from __future__ import annotations

"""
Core type aliases, mode names, and lightweight helpers.
"""

import math
import re
from typing import Literal, Sequence, Tuple, Union, get_args

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Mask = NDArray[np.uint8]  # (H, W)
U8Palette = NDArray[np.uint8]  # (P, 3)

PaletteLike = Union[Sequence[HexStr], Sequence[RGBTuple], NDArray[np.generic]]

# Mode names

DitherMode = Literal["floyd-steinberg", "ordered"]
PaletteMode = Literal[
    "nearest", "luminance", "gradient-horizontal", "gradient-vertical"
]

DITHER_MODES: Tuple[str, ...] = get_args(DitherMode)
PALETTE_MODES: Tuple[str, ...] = get_args(PaletteMode)

_HEX_RE = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def round_half_up(value: float) -> int:
    """Round .5 away from -inf, like JavaScript's Math.round."""
    return int(math.floor(value + 0.5))


def rgb_to_hex(rgb: Sequence[int]) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{int(rgb[0]):02x}{int(rgb[1]):02x}{int(rgb[2]):02x}"


def parse_hex(hex_str: str) -> RGBTuple:
    """
    Parse 'rrggbb' or '#rrggbb' (case-insensitive) into an RGB tuple.
    Anything else parses to black; there is no error channel.
    """
    m = _HEX_RE.fullmatch(hex_str) if isinstance(hex_str, str) else None
    if m is None:
        return (0, 0, 0)
    return (int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))


def palette_to_array(palette: PaletteLike) -> U8Palette:
    """
    Coerce hex strings, RGB tuples or an (P,3) array into a uint8 (P,3) palette.
    Hex strings go through parse_hex, so malformed entries become black.
    """
    if isinstance(palette, np.ndarray):
        arr = np.asarray(palette)
        if arr.ndim != 2 or arr.shape[-1] != 3:
            raise TypeError("expected (P,3) palette array")
        return np.clip(arr, 0, 255).astype(np.uint8)
    rows = [parse_hex(p) if isinstance(p, str) else tuple(p) for p in palette]
    out = np.zeros((len(rows), 3), dtype=np.uint8)
    for i, row in enumerate(rows):
        if len(row) < 3:
            raise ValueError("palette entry too small for RGB")
        out[i] = [int(row[0]), int(row[1]), int(row[2])]
    return out


def palette_to_hex(palette: U8Palette) -> list[HexStr]:
    """(P,3) palette array to a list of '#rrggbb' strings."""
    return [rgb_to_hex(row) for row in np.asarray(palette).tolist()]


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3 or 4) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] < 3:
        raise TypeError("expected uint8 (H,W,3/4) image")
    return image  # type: ignore[return-value]


def assert_u8_mask_2d(mask_array: np.ndarray) -> U8Mask:
    """Validate a uint8 (H,W) mask and return it typed as U8Mask."""
    if mask_array.dtype != np.uint8 or mask_array.ndim != 2:
        raise TypeError("expected uint8 (H,W) mask")
    return mask_array  # type: ignore[return-value]


def assert_non_empty_palette(palette: U8Palette) -> U8Palette:
    """Dithering needs at least one colour; an empty palette is a caller bug."""
    if palette.ndim != 2 or palette.shape[-1] != 3:
        raise TypeError("expected (P,3) palette array")
    if palette.shape[0] == 0:
        raise ValueError("palette must contain at least one colour")
    return palette


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "U8Mask",
    "U8Palette",
    "PaletteLike",
    "DitherMode",
    "PaletteMode",
    "DITHER_MODES",
    "PALETTE_MODES",
    # helpers
    "clamp_value",
    "round_half_up",
    "rgb_to_hex",
    "parse_hex",
    "palette_to_array",
    "palette_to_hex",
    "assert_u8_image_rgb",
    "assert_u8_mask_2d",
    "assert_non_empty_palette",
]
