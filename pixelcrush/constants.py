"""
Global tunables used across the project.

- Default palette and settings
- Dithering constants (Bayer matrix, spread, Floyd-Steinberg kernel)
- Palette extraction constants (EXTRACT_*)
- Configuration limits
"""
from __future__ import annotations

from typing import List, Tuple

# =========================
# Defaults
# =========================
DEFAULT_PALETTE: List[str] = ["#1a0f5a", "#e939f1", "#349cfc", "#ff9a57", "#ffffff"]

DEFAULT_PIXEL_SIZE = 40
DEFAULT_ALGORITHM = "floyd-steinberg"
DEFAULT_PALETTE_MODE = "nearest"
DEFAULT_COLOUR_COUNT = 5
DEFAULT_FRAME_DELAY_MS = 500

# =========================
# Configuration limits
# =========================
PIXEL_SIZE_MIN = 10
PIXEL_SIZE_MAX = 100
COLOUR_COUNT_MIN = 2
COLOUR_COUNT_MAX = 16
MIN_GIF_FRAMES = 2

# =========================
# Dithering
# =========================

# 4x4 Bayer threshold matrix, tiled across the image.
BAYER_4X4: Tuple[Tuple[int, ...], ...] = (
    (0, 8, 2, 10),
    (12, 4, 14, 6),
    (3, 11, 1, 9),
    (15, 7, 13, 5),
)
BAYER_SIZE = 4
BAYER_LEVELS = 16

# Ordered dither contrast: threshold in [-0.5, 0.4375] times this.
SPREAD_FACTOR = 64.0

# Error diffusion kernel: Floyd-Steinberg (weights sum to 16).
KERNEL_FS: Tuple[Tuple[int, int, float], ...] = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
)

# Weight of the nearest match when blending with the gradient stop.
GRADIENT_BLEND = 0.5

# =========================
# Palette extraction
# =========================

# Longer side of the working sample.
EXTRACT_SAMPLE_MAX = 150

# Pixels need alpha >= this to be sampled (opacity above 50%).
EXTRACT_ALPHA_MIN = 128

# Median cut over-extracts roughly this many candidates per requested colour.
EXTRACT_OVERSAMPLE = 4

# Minimum redmean distance between accepted swatches (halved for backfill).
EXTRACT_MIN_DISTANCE = 60.0

# Candidate ranking: saturation vs brightness.
EXTRACT_W_SATURATION = 0.7
EXTRACT_W_BRIGHTNESS = 0.3

# Channel weights for luminance (Rec. 601).
LUMA_WEIGHTS: Tuple[float, float, float] = (0.299, 0.587, 0.114)
