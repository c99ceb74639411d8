# pixelcrush/assign.py
from __future__ import annotations

"""
Palette assignment: map a source colour at (x, y) to a palette index.

Modes:
  nearest             : first palette entry with minimum Euclidean RGB distance
  luminance           : index = floor(luma/255 * P), palette order is dark -> light
  gradient-horizontal : blend the positional gradient stop at x/w with the
                        nearest match, then snap back to the palette
  gradient-vertical   : as above with y/h

Two flavours of every rule:
  resolve_index(...)   scalar, one colour, used by the raster-ordered
                       Floyd-Steinberg loop
  resolve_indices(...) vectorized over many pixels, used by ordered dithering

Both produce identical indices for identical inputs. Palette membership is
guaranteed because every rule ends in an index, never in a blended colour.
"""

import math
from typing import List, Sequence

import numpy as np

from .colour_model import lerp, lerp_vec, luminance, luminance_vec
from .colour_model import squared_distance_to_palette
from .constants import GRADIENT_BLEND
from .core_types import PALETTE_MODES, RGBTuple, U8Palette

ColourLike = Sequence[float]


def check_palette_mode(palette_mode: str) -> str:
    if palette_mode not in PALETTE_MODES:
        raise ValueError(f"unknown palette mode: {palette_mode!r}")
    return palette_mode


def palette_rows(palette: U8Palette) -> List[RGBTuple]:
    """(P,3) array to plain int tuples for the scalar hot loop."""
    return [(int(r), int(g), int(b)) for r, g, b in np.asarray(palette).tolist()]


# Scalar rules


def nearest_index(colour: ColourLike, pal: Sequence[RGBTuple]) -> int:
    """First palette index at minimum distance (squared, so ties stay exact)."""
    r, g, b = float(colour[0]), float(colour[1]), float(colour[2])
    best = 0
    best_d2 = math.inf
    for j, (pr, pg, pb) in enumerate(pal):
        dr = r - pr
        dg = g - pg
        db = b - pb
        d2 = dr * dr + dg * dg + db * db
        if d2 < best_d2:
            best_d2 = d2
            best = j
    return best


def luminance_index(colour: ColourLike, n: int) -> int:
    idx = int(math.floor(luminance(colour) / 255.0 * n))
    return 0 if idx < 0 else n - 1 if idx > n - 1 else idx


def gradient_colour(pal: Sequence[RGBTuple], position: float) -> RGBTuple:
    """
    Piecewise-linear colour along the palette stops, position 0..1 mapped
    onto stops 0..P-1.
    """
    n = len(pal)
    if n == 1:
        return pal[0]
    scaled = position * (n - 1)
    i = int(math.floor(scaled))
    t = scaled - i
    if i >= n - 1:
        return pal[n - 1]
    return lerp(pal[i], pal[i + 1], t)


def gradient_index(
    colour: ColourLike, position: float, pal: Sequence[RGBTuple]
) -> int:
    stop = gradient_colour(pal, position)
    near = pal[nearest_index(colour, pal)]
    blended = lerp(stop, near, GRADIENT_BLEND)
    return nearest_index(blended, pal)


def resolve_index(
    colour: ColourLike,
    x: int,
    y: int,
    width: int,
    height: int,
    pal: Sequence[RGBTuple],
    palette_mode: str,
) -> int:
    """Resolve one colour at (x, y) in a width x height buffer to a palette index."""
    if palette_mode == "luminance":
        return luminance_index(colour, len(pal))
    if palette_mode == "gradient-horizontal":
        return gradient_index(colour, x / width, pal)
    if palette_mode == "gradient-vertical":
        return gradient_index(colour, y / height, pal)
    return nearest_index(colour, pal)


# Vectorized rules


def nearest_indices(rgb: np.ndarray, palette: U8Palette) -> np.ndarray:
    """(N,3) -> (N,) nearest palette indices; argmin keeps the first on ties."""
    if rgb.shape[0] == 0:
        return np.zeros((0,), dtype=np.int64)
    return np.argmin(squared_distance_to_palette(rgb, palette), axis=1)


def luminance_indices(rgb: np.ndarray, n: int) -> np.ndarray:
    idx = np.floor(luminance_vec(rgb) / 255.0 * n).astype(np.int64)
    return np.clip(idx, 0, n - 1)


def gradient_colours(palette: U8Palette, positions: np.ndarray) -> np.ndarray:
    """(N,) positions in [0,1] -> (N,3) float64 gradient colours."""
    n = palette.shape[0]
    pal64 = palette.astype(np.float64)
    if n == 1:
        return np.repeat(pal64[:1], positions.shape[0], axis=0)
    scaled = positions.astype(np.float64, copy=False) * (n - 1)
    i = np.floor(scaled).astype(np.int64)
    t = (scaled - i)[:, None]
    lo = np.clip(i, 0, n - 2)
    mixed = lerp_vec(pal64[lo], pal64[lo + 1], t)
    return np.where((i >= n - 1)[:, None], pal64[n - 1], mixed)


def gradient_indices(
    rgb: np.ndarray, positions: np.ndarray, palette: U8Palette
) -> np.ndarray:
    stops = gradient_colours(palette, positions)
    near = palette.astype(np.float64)[nearest_indices(rgb, palette)]
    blended = lerp_vec(stops, near, GRADIENT_BLEND)
    return nearest_indices(blended, palette)


def resolve_indices(
    rgb: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    width: int,
    height: int,
    palette: U8Palette,
    palette_mode: str,
) -> np.ndarray:
    """
    Vectorized resolve_index over N colours.

    rgb    : (N,3) colours (any numeric dtype)
    xs, ys : (N,) integer pixel coordinates
    Returns int64 (N,) palette indices.
    """
    if palette_mode == "luminance":
        return luminance_indices(rgb, palette.shape[0])
    if palette_mode == "gradient-horizontal":
        return gradient_indices(rgb, xs.astype(np.float64) / width, palette)
    if palette_mode == "gradient-vertical":
        return gradient_indices(rgb, ys.astype(np.float64) / height, palette)
    return nearest_indices(rgb, palette)


__all__ = [
    "check_palette_mode",
    "palette_rows",
    "nearest_index",
    "luminance_index",
    "gradient_colour",
    "gradient_index",
    "resolve_index",
    "nearest_indices",
    "luminance_indices",
    "gradient_colours",
    "gradient_indices",
    "resolve_indices",
]
