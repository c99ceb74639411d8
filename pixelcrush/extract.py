# pixelcrush/extract.py
from __future__ import annotations

"""
Palette extraction (median cut with diversity filtering).

Exports:
  sample_visible_pixels(img_rgb, alpha=None, max_side=EXTRACT_SAMPLE_MAX) -> int32 [N,3]
  median_cut(pixels, depth) -> list[RGBTuple]
  rank_candidates(candidates) -> list[RGBTuple]
  select_diverse(ranked, colour_count, min_distance=EXTRACT_MIN_DISTANCE) -> list[RGBTuple]
  extract_palette(img_rgb, alpha=None, colour_count=5, debug=False) -> uint8 [K,3]

Pipeline:
  1) nearest-neighbour sample, longer side <= 150, drop pixels at <= 50% opacity
  2) no pixels left -> DEFAULT_PALETTE
  3) median cut to ~4x colour_count leaves; each leaf keeps its member farthest
     from the leaf mean, favouring vivid swatches over washed-out averages
  4) rank by 0.7 * saturation + 0.3 * brightness
  5) greedy pick with a redmean distance floor, halved once to backfill
  6) sort dark -> light so index order works for luminance and gradient modes
"""

import math
from typing import List, Optional, Sequence

import numpy as np
from PIL import Image

from .colour_model import luminance, perceptual_distance, saturation_brightness
from .constants import (
    DEFAULT_PALETTE,
    EXTRACT_ALPHA_MIN,
    EXTRACT_MIN_DISTANCE,
    EXTRACT_OVERSAMPLE,
    EXTRACT_SAMPLE_MAX,
    EXTRACT_W_BRIGHTNESS,
    EXTRACT_W_SATURATION,
)
from .core_types import (
    RGBTuple,
    U8Image,
    U8Mask,
    U8Palette,
    assert_u8_image_rgb,
    palette_to_array,
    round_half_up,
)
from .utils import debug_log, key_value_pairs_to_string


def sample_visible_pixels(
    img_rgb: U8Image,
    alpha: Optional[U8Mask] = None,
    max_side: int = EXTRACT_SAMPLE_MAX,
) -> np.ndarray:
    """Reduced-resolution sample of visible pixels as int32 [N,3]."""
    assert_u8_image_rgb(img_rgb)
    H, W = int(img_rgb.shape[0]), int(img_rgb.shape[1])
    if H == 0 or W == 0:
        return np.zeros((0, 3), dtype=np.int32)

    rgba = np.empty((H, W, 4), dtype=np.uint8)
    rgba[..., :3] = img_rgb[..., :3]
    if alpha is not None:
        rgba[..., 3] = alpha
    elif img_rgb.shape[-1] >= 4:
        rgba[..., 3] = img_rgb[..., 3]
    else:
        rgba[..., 3] = 255

    scale = min(1.0, float(max_side) / float(max(W, H)))
    if scale < 1.0:
        w = max(1, round_half_up(W * scale))
        h = max(1, round_half_up(H * scale))
        im = Image.fromarray(rgba).resize(
            (w, h), resample=Image.Resampling.NEAREST
        )
        rgba = np.array(im, dtype=np.uint8)

    flat = rgba.reshape(-1, 4)
    visible = flat[:, 3] >= EXTRACT_ALPHA_MIN
    return flat[visible, :3].astype(np.int32)


def _representative(pixels: np.ndarray) -> RGBTuple:
    """Member farthest from the subset mean (first on ties)."""
    mean = pixels.astype(np.float64).mean(axis=0)
    diff = pixels.astype(np.float64) - mean
    far = int(np.argmax(np.sum(diff * diff, axis=1)))
    r, g, b = pixels[far].tolist()
    return (int(r), int(g), int(b))


def median_cut(pixels: np.ndarray, depth: int) -> List[RGBTuple]:
    """
    Split along the widest channel at the median, depth times.
    Returns one representative per non-empty leaf, left to right.
    """
    if pixels.shape[0] == 0:
        return []
    if depth <= 0:
        return [_representative(pixels)]

    ranges = pixels.max(axis=0) - pixels.min(axis=0)
    channel = int(np.argmax(ranges))
    order = np.argsort(pixels[:, channel], kind="stable")
    ordered = pixels[order]
    mid = ordered.shape[0] // 2
    return median_cut(ordered[:mid], depth - 1) + median_cut(ordered[mid:], depth - 1)


def cut_depth(colour_count: int) -> int:
    """Depth giving ~EXTRACT_OVERSAMPLE x colour_count leaves."""
    return int(math.ceil(math.log2(colour_count * EXTRACT_OVERSAMPLE)))


def candidate_score(rgb: RGBTuple) -> float:
    sat, bright = saturation_brightness(rgb)
    return EXTRACT_W_SATURATION * sat + EXTRACT_W_BRIGHTNESS * bright


def rank_candidates(candidates: Sequence[RGBTuple]) -> List[RGBTuple]:
    """Most distinctive first; sorted() keeps input order on equal scores."""
    return sorted(candidates, key=lambda c: -candidate_score(c))


def select_diverse(
    ranked: Sequence[RGBTuple],
    colour_count: int,
    min_distance: float = EXTRACT_MIN_DISTANCE,
) -> List[RGBTuple]:
    """
    Greedy pick in rank order, keeping each new colour at least min_distance
    (redmean) from everything already picked. A second pass at half the
    distance fills any remaining slots.
    """
    selected: List[RGBTuple] = []
    taken = set()
    for threshold in (min_distance, min_distance / 2.0):
        for i, cand in enumerate(ranked):
            if len(selected) >= colour_count:
                break
            if i in taken:
                continue
            if all(perceptual_distance(cand, s) >= threshold for s in selected):
                selected.append(cand)
                taken.add(i)
        if len(selected) >= colour_count:
            break
    return selected


def extract_palette(
    img_rgb: U8Image,
    alpha: Optional[U8Mask] = None,
    colour_count: int = 5,
    *,
    debug: bool = False,
) -> U8Palette:
    """
    Derive a diverse palette of at most colour_count colours, ordered
    dark -> light. Deterministic for identical inputs.
    """
    if colour_count < 1:
        raise ValueError("colour_count must be >= 1")

    pixels = sample_visible_pixels(img_rgb, alpha)
    if pixels.shape[0] == 0:
        if debug:
            debug_log("extract: no visible pixels, using default palette")
        return palette_to_array(DEFAULT_PALETTE)

    depth = cut_depth(colour_count)
    candidates = median_cut(pixels, depth)
    ranked = rank_candidates(candidates)
    chosen = select_diverse(ranked, colour_count)
    chosen.sort(key=luminance)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Sampled", int(pixels.shape[0])),
                    ("Depth", depth),
                    ("Candidates", len(candidates)),
                    ("Selected", len(chosen)),
                ]
            )
        )
    return np.array(chosen, dtype=np.uint8).reshape(-1, 3)


__all__ = [
    "sample_visible_pixels",
    "median_cut",
    "cut_depth",
    "candidate_score",
    "rank_candidates",
    "select_diverse",
    "extract_palette",
]
