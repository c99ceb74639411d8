# pixelcrush/__init__.py
"""
pixelcrush package.

Purpose:
  Turn full-colour images into low-colour pixel art: nearest-neighbour
  downsampling, palette-constrained dithering, optional palette extraction.
  See crush.py for the CLI.

Public API:
  process_image   : downsample -> dither -> upsample entry point.
  dither          : Floyd-Steinberg or ordered (Bayer) dithering onto a palette.
  extract_palette : median-cut palette extraction with diversity filtering.
  downsample / upsample : nearest-neighbour resampling.
  colour_model    : distance, redmean distance, luminance, lerp.
  core_types      : shared aliases (U8Image, U8Mask, RGBTuple) and hex helpers.
  settings        : DitherSettings and input clamping.
  animation       : frame timeline and GIF encoding.

Quick start:
  from pixelcrush import process_image, extract_palette
  rgb_out, alpha_out = process_image(rgb, ["#000000", "#ffffff"], 40, "ordered")
"""

__version__ = "0.1.0"

from . import colour_model
from . import core_types
from . import palette_data
from . import settings
from . import utils
from . import dithering

from .core_types import parse_hex, rgb_to_hex  # noqa: E402,F401
from .dithering import dither  # noqa: E402,F401
from .extract import extract_palette  # noqa: E402,F401
from .resample import downsample, upsample  # noqa: E402,F401
from .pipeline import process_image, process_with_settings  # noqa: E402,F401
from .settings import DitherSettings, make_settings  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_model",
    "core_types",
    "palette_data",
    "settings",
    "utils",
    "dithering",
    "parse_hex",
    "rgb_to_hex",
    "dither",
    "extract_palette",
    "downsample",
    "upsample",
    "process_image",
    "process_with_settings",
    "DitherSettings",
    "make_settings",
]
