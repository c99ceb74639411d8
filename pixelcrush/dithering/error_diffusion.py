# pixelcrush/dithering/error_diffusion.py
from __future__ import annotations

"""
Floyd-Steinberg error diffusion in RGB.

Raster order (top to bottom, left to right), float64 accumulators seeded from
the input. Every output pixel depends on the error already pushed into it, so
this loop is strictly sequential.
"""

import math
from typing import Optional, Dict

import numpy as np

from ..assign import palette_rows, resolve_index
from ..constants import KERNEL_FS
from ..core_types import U8Image, U8Palette
from ..utils import debug_log


def _clamp_round(v: float) -> int:
    r = int(math.floor(v + 0.5))
    return 0 if r < 0 else 255 if r > 255 else r


def floyd_steinberg_dither(
    img_rgb: U8Image,
    palette: U8Palette,
    palette_mode: str,
    *,
    debug: bool = False,
) -> U8Image:
    """
    Diffuse quantisation error right 7/16, below-left 3/16, below 5/16 and
    below-right 1/16. Neighbours outside the buffer are skipped, so error is
    only lost at the borders.
    """
    H, W = int(img_rgb.shape[0]), int(img_rgb.shape[1])
    out: U8Image = np.zeros((H, W, 3), dtype=np.uint8)
    if H == 0 or W == 0:
        return out

    acc = img_rgb[..., :3].astype(np.float64)
    pal = palette_rows(palette)
    used: Optional[Dict[int, int]] = {} if debug else None

    for y in range(H):
        row = acc[y]
        for x in range(W):
            old = (
                _clamp_round(row[x, 0]),
                _clamp_round(row[x, 1]),
                _clamp_round(row[x, 2]),
            )
            j = resolve_index(old, x, y, W, H, pal, palette_mode)
            new = pal[j]
            out[y, x] = new
            if used is not None:
                used[j] = used.get(j, 0) + 1

            er = old[0] - new[0]
            eg = old[1] - new[1]
            eb = old[2] - new[2]
            for dx, dy, w in KERNEL_FS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < W and ny < H:
                    cell = acc[ny, nx]
                    cell[0] += er * w
                    cell[1] += eg * w
                    cell[2] += eb * w

    if used is not None:
        debug_log(
            f"floyd-steinberg  size={W}x{H}  mode={palette_mode}  "
            f"entries_used={len(used)}/{len(pal)}"
        )
    return out


__all__ = ["floyd_steinberg_dither"]
