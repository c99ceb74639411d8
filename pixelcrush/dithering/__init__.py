"""
Dithering API.

Provides:
  dither(img_rgb, palette, mode="floyd-steinberg", palette_mode="nearest", *, debug=False) -> U8Image
    Map a buffer onto a palette with error diffusion or ordered dithering.

    Args:
      img_rgb      : uint8 [H,W,3]
      palette      : non-empty palette (hex strings, RGB tuples or uint8 [P,3])
      mode         : "floyd-steinberg" | "ordered"
      palette_mode : "nearest" | "luminance" | "gradient-horizontal" | "gradient-vertical"

    Returns:
      uint8 [H,W,3], every pixel an exact palette colour.

Notes:
  - Floyd-Steinberg runs in strict raster order with float accumulators.
  - Ordered mode uses a tiled 4x4 Bayer matrix and is vectorized.
"""

from .engine import check_dither_mode, dither, palette_membership
from .error_diffusion import floyd_steinberg_dither
from .ordered import bayer_threshold, ordered_dither

__all__ = [
    "dither",
    "check_dither_mode",
    "palette_membership",
    "floyd_steinberg_dither",
    "ordered_dither",
    "bayer_threshold",
]
