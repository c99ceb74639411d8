# pixelcrush/pipeline.py
from __future__ import annotations

"""
Pipeline orchestrator: downsample -> dither -> upsample.

Every stage returns a fresh buffer; the caller's arrays are never modified.
"""

import time
from typing import Optional, Tuple

import numpy as np

from .core_types import (
    PaletteLike,
    U8Image,
    U8Mask,
    assert_non_empty_palette,
    assert_u8_image_rgb,
    palette_to_array,
)
from .dithering import dither
from .resample import downsample, upsample
from .settings import DitherSettings
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string


def process_image(
    img_rgb: U8Image,
    palette: PaletteLike,
    pixel_size: float = 40,
    algorithm: str = "floyd-steinberg",
    palette_mode: str = "nearest",
    alpha: Optional[U8Mask] = None,
    *,
    debug: bool = False,
) -> Tuple[U8Image, Optional[U8Mask]]:
    """
    Pixelate and dither one image.

    Args:
      img_rgb      : uint8 [H,W,3]
      palette      : non-empty palette (hex strings, RGB tuples or uint8 [P,3])
      pixel_size   : working grid size as percent of the source, [10,100]
      algorithm    : "floyd-steinberg" | "ordered"
      palette_mode : "nearest" | "luminance" | "gradient-horizontal" | "gradient-vertical"
      alpha        : optional uint8 [H,W]; resampled alongside, never dithered

    Returns:
      (rgb_out uint8 [H,W,3], alpha_out uint8 [H,W] or None), same size as the input.
    """
    assert_u8_image_rgb(img_rgb)
    pal = assert_non_empty_palette(palette_to_array(palette))
    H, W = int(img_rgb.shape[0]), int(img_rgb.shape[1])

    if H == 0 or W == 0:
        if debug:
            debug_log("pipeline: empty source, nothing to do")
        empty_alpha = None if alpha is None else alpha.copy()
        return np.zeros((H, W, 3), dtype=np.uint8), empty_alpha

    t0 = time.perf_counter()
    small, small_alpha = downsample(img_rgb, pixel_size, alpha)
    t1 = time.perf_counter()
    mapped = dither(small, pal, algorithm, palette_mode, debug=debug)
    t2 = time.perf_counter()
    out_rgb, out_alpha = upsample(mapped, W, H, small_alpha)
    t3 = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Source", f"{W}x{H}"),
                    ("Grid", f"{small.shape[1]}x{small.shape[0]}"),
                    ("Palette", int(pal.shape[0])),
                    ("Down", format_seconds_compact(t1 - t0)),
                    ("Dither", format_seconds_compact(t2 - t1)),
                    ("Up", format_seconds_compact(t3 - t2)),
                ]
            )
        )
    return out_rgb, out_alpha


def process_with_settings(
    img_rgb: U8Image,
    settings: DitherSettings,
    alpha: Optional[U8Mask] = None,
    *,
    debug: bool = False,
) -> Tuple[U8Image, Optional[U8Mask]]:
    """process_image() driven by a DitherSettings value."""
    return process_image(
        img_rgb,
        settings.palette,
        settings.pixel_size,
        settings.algorithm,
        settings.palette_mode,
        alpha,
        debug=debug,
    )


__all__ = ["process_image", "process_with_settings"]
