# pixelcrush/colour_model.py
from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from .constants import LUMA_WEIGHTS
from .core_types import RGBTuple, U8Palette, round_half_up

"""
RGB distance, luminance and interpolation. Scalar helpers for single colours
plus vectorized NumPy variants for whole buffers.

Exports:
- distance(a, b)                 # Euclidean RGB
- perceptual_distance(a, b)      # "redmean" weighted distance
- luminance(c)                   # 0.299R + 0.587G + 0.114B, [0,255]
- lerp(a, b, t)                  # per-channel, rounded half-up
- saturation_brightness(c)       # HSV S and V in [0,1]
- luminance_vec(rgb)             # (...,3) -> (...)
- squared_distance_to_palette(rgb, pal) -> (N,P)
- lerp_vec(a, b, t)              # (...,3) rows, rounded half-up
"""

ColourLike = Sequence[float]


def distance(a: ColourLike, b: ColourLike) -> float:
    """Euclidean distance over (R, G, B)."""
    dr = float(a[0]) - float(b[0])
    dg = float(a[1]) - float(b[1])
    db = float(a[2]) - float(b[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def perceptual_distance(a: ColourLike, b: ColourLike) -> float:
    """
    Redmean distance: red-weighted Euclidean approximation of perceived
    difference. Used for swatch diversity during extraction.
    """
    r_mean = (float(a[0]) + float(b[0])) / 2.0
    dr = float(a[0]) - float(b[0])
    dg = float(a[1]) - float(b[1])
    db = float(a[2]) - float(b[2])
    return math.sqrt(
        (2.0 + r_mean / 256.0) * dr * dr
        + 4.0 * dg * dg
        + (2.0 + (255.0 - r_mean) / 256.0) * db * db
    )


def luminance(c: ColourLike) -> float:
    """Rec. 601 luma in [0, 255]."""
    wr, wg, wb = LUMA_WEIGHTS
    return wr * float(c[0]) + wg * float(c[1]) + wb * float(c[2])


def lerp(a: ColourLike, b: ColourLike, t: float) -> RGBTuple:
    """Linear interpolation a -> b, each channel rounded half-up."""
    return (
        round_half_up(float(a[0]) + (float(b[0]) - float(a[0])) * t),
        round_half_up(float(a[1]) + (float(b[1]) - float(a[1])) * t),
        round_half_up(float(a[2]) + (float(b[2]) - float(a[2])) * t),
    )


def saturation_brightness(c: ColourLike) -> Tuple[float, float]:
    """HSV saturation and value, both in [0, 1]. Black has zero saturation."""
    hi = max(float(c[0]), float(c[1]), float(c[2]))
    lo = min(float(c[0]), float(c[1]), float(c[2]))
    sat = 0.0 if hi <= 0.0 else (hi - lo) / hi
    return sat, hi / 255.0


# Vectorized variants


def luminance_vec(rgb: np.ndarray) -> np.ndarray:
    """Luma for (..., 3) rows. Same operation order as luminance()."""
    arr = rgb.astype(np.float64, copy=False)
    wr, wg, wb = LUMA_WEIGHTS
    return wr * arr[..., 0] + wg * arr[..., 1] + wb * arr[..., 2]


def squared_distance_to_palette(rgb: np.ndarray, pal: U8Palette) -> np.ndarray:
    """(N,3) colours vs (P,3) palette -> (N,P) squared Euclidean distances."""
    src = rgb.reshape(-1, 3).astype(np.float64, copy=False)
    diff = src[:, None, :] - pal.astype(np.float64)[None, :, :]
    return np.sum(diff * diff, axis=2)


def lerp_vec(a: np.ndarray, b: np.ndarray, t: float | np.ndarray) -> np.ndarray:
    """Row-wise lerp with half-up rounding; returns float64 integral values."""
    a64 = a.astype(np.float64, copy=False)
    b64 = b.astype(np.float64, copy=False)
    return np.floor(a64 + (b64 - a64) * t + 0.5)


__all__ = [
    "distance",
    "perceptual_distance",
    "luminance",
    "lerp",
    "saturation_brightness",
    "luminance_vec",
    "squared_distance_to_palette",
    "lerp_vec",
]
