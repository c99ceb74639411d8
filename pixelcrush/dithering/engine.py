# pixelcrush/dithering/engine.py
from __future__ import annotations

"""
Dither dispatcher: pick the spatial strategy, validate the palette once.
"""

import numpy as np

from ..assign import check_palette_mode
from ..core_types import (
    DITHER_MODES,
    PaletteLike,
    U8Image,
    assert_non_empty_palette,
    assert_u8_image_rgb,
    palette_to_array,
)
from .error_diffusion import floyd_steinberg_dither
from .ordered import ordered_dither


def check_dither_mode(mode: str) -> str:
    if mode not in DITHER_MODES:
        raise ValueError(f"unknown dither algorithm: {mode!r}")
    return mode


def dither(
    img_rgb: U8Image,
    palette: PaletteLike,
    mode: str = "floyd-steinberg",
    palette_mode: str = "nearest",
    *,
    debug: bool = False,
) -> U8Image:
    """
    Map every pixel of img_rgb onto the palette.

    Args:
      img_rgb      : uint8 [H,W,3] (a 4th channel is ignored)
      palette      : hex strings, RGB tuples or uint8 [P,3]; must be non-empty
      mode         : "floyd-steinberg" | "ordered"
      palette_mode : "nearest" | "luminance" | "gradient-horizontal" | "gradient-vertical"

    Returns:
      New uint8 [H,W,3] buffer whose pixels are all palette members.

    Raises:
      ValueError on an empty palette or unknown mode names.
    """
    assert_u8_image_rgb(img_rgb)
    pal = assert_non_empty_palette(palette_to_array(palette))
    check_dither_mode(mode)
    check_palette_mode(palette_mode)

    if mode == "ordered":
        return ordered_dither(img_rgb, pal, palette_mode, debug=debug)
    return floyd_steinberg_dither(img_rgb, pal, palette_mode, debug=debug)


def palette_membership(img_rgb: U8Image, palette: PaletteLike) -> bool:
    """True when every pixel of img_rgb is an exact palette colour."""
    pal = palette_to_array(palette)
    flat = img_rgb[..., :3].reshape(-1, 3)
    if flat.shape[0] == 0:
        return True
    hits = np.all(flat[:, None, :] == pal[None, :, :], axis=2)
    return bool(np.all(np.any(hits, axis=1)))


__all__ = ["check_dither_mode", "dither", "palette_membership"]
