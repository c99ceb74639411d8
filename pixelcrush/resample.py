# pixelcrush/resample.py
from __future__ import annotations

"""
Nearest-neighbour down/up sampling with Pillow.

Neither direction blends source pixels: every working cell keeps a single
flat source colour, and upsampling turns each cell into a hard block.

Exports:
- target_size(width, height, pixel_size) -> (w, h)
- downsample(rgb, pixel_size, alpha=None) -> (rgb_small, alpha_small | None)
- upsample(rgb_small, width, height, alpha=None) -> (rgb_big, alpha_big | None)
"""

from typing import Optional, Tuple

import numpy as np
from PIL import Image

from .core_types import (
    U8Image,
    U8Mask,
    assert_u8_image_rgb,
    assert_u8_mask_2d,
    round_half_up,
)

_NEAREST = Image.Resampling.NEAREST


def target_size(width: int, height: int, pixel_size: float) -> Tuple[int, int]:
    """Working grid for pixel_size percent, floored at 1x1."""
    scale = float(pixel_size) / 100.0
    return (
        max(1, round_half_up(width * scale)),
        max(1, round_half_up(height * scale)),
    )


def _resize_nearest(arr: np.ndarray, width: int, height: int) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError(f"resample target must be positive, got {width}x{height}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError("cannot resample an empty image")
    if (arr.shape[1], arr.shape[0]) == (width, height):
        return arr.copy()
    im = Image.fromarray(np.ascontiguousarray(arr))
    return np.array(im.resize((width, height), resample=_NEAREST), dtype=np.uint8)


def downsample(
    rgb: U8Image, pixel_size: float, alpha: Optional[U8Mask] = None
) -> Tuple[U8Image, Optional[U8Mask]]:
    """
    Shrink to pixel_size percent of the source.
    pixel_size is expected in [10, 100]; callers clamp it.
    """
    assert_u8_image_rgb(rgb)
    H, W = int(rgb.shape[0]), int(rgb.shape[1])
    w, h = target_size(W, H, pixel_size)
    small = _resize_nearest(rgb[..., :3], w, h)
    small_alpha = None if alpha is None else _resize_nearest(assert_u8_mask_2d(alpha), w, h)
    return small, small_alpha


def upsample(
    rgb_small: U8Image,
    width: int,
    height: int,
    alpha: Optional[U8Mask] = None,
) -> Tuple[U8Image, Optional[U8Mask]]:
    """Magnify back to width x height with hard pixel blocks."""
    assert_u8_image_rgb(rgb_small)
    big = _resize_nearest(rgb_small[..., :3], int(width), int(height))
    big_alpha = (
        None
        if alpha is None
        else _resize_nearest(assert_u8_mask_2d(alpha), int(width), int(height))
    )
    return big, big_alpha


__all__ = ["target_size", "downsample", "upsample"]
