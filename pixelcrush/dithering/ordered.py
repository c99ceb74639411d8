# pixelcrush/dithering/ordered.py
from __future__ import annotations

"""
Ordered (Bayer 4x4) dithering.

Each pixel is perturbed by a purely positional threshold and resolved on its
own, with no error carried between pixels. That makes the whole pass a set of
array operations; results do not depend on processing order.
"""

import numpy as np

from ..assign import resolve_indices
from ..constants import BAYER_4X4, BAYER_LEVELS, BAYER_SIZE, SPREAD_FACTOR
from ..core_types import U8Image, U8Palette
from ..utils import debug_log

_BAYER = np.array(BAYER_4X4, dtype=np.float64)


def bayer_threshold(x: int, y: int) -> float:
    """Threshold in [-0.5, 0.4375] for pixel (x, y)."""
    return float(_BAYER[y % BAYER_SIZE, x % BAYER_SIZE]) / BAYER_LEVELS - 0.5


def bayer_threshold_map(height: int, width: int) -> np.ndarray:
    """(H,W) tiled threshold map, same values as bayer_threshold()."""
    ys = np.arange(height) % BAYER_SIZE
    xs = np.arange(width) % BAYER_SIZE
    return _BAYER[ys[:, None], xs[None, :]] / BAYER_LEVELS - 0.5


def perturb(img_rgb: U8Image) -> np.ndarray:
    """Add threshold * SPREAD_FACTOR to every channel, clamped to [0,255]. float64."""
    H, W = int(img_rgb.shape[0]), int(img_rgb.shape[1])
    offset = bayer_threshold_map(H, W)[..., None] * SPREAD_FACTOR
    return np.clip(img_rgb[..., :3].astype(np.float64) + offset, 0.0, 255.0)


def ordered_dither(
    img_rgb: U8Image,
    palette: U8Palette,
    palette_mode: str,
    *,
    debug: bool = False,
) -> U8Image:
    """Bayer-perturb every pixel, then resolve it against the palette."""
    H, W = int(img_rgb.shape[0]), int(img_rgb.shape[1])
    if H == 0 or W == 0:
        return np.zeros((H, W, 3), dtype=np.uint8)

    perturbed = perturb(img_rgb).reshape(-1, 3)
    ys, xs = np.divmod(np.arange(H * W), W)
    idx = resolve_indices(perturbed, xs, ys, W, H, palette, palette_mode)

    if debug:
        debug_log(
            f"ordered  size={W}x{H}  mode={palette_mode}  "
            f"entries_used={np.unique(idx).size}/{palette.shape[0]}"
        )
    return palette[idx].reshape(H, W, 3).astype(np.uint8, copy=False)


__all__ = ["bayer_threshold", "bayer_threshold_map", "perturb", "ordered_dither"]
