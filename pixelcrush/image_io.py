# pixelcrush/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import U8Image, U8Mask, assert_u8_image_rgb

"""
Image I/O helpers: decode to (rgb, alpha) arrays, encode PNG files or bytes.
"""

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp"}


def image_to_rgba_arrays(im: Image.Image) -> Tuple[U8Image, U8Mask]:
    """Pillow image (any mode) -> (uint8 [H,W,3], uint8 [H,W])."""
    im = ImageOps.exif_transpose(im)
    arr = np.array(im.convert("RGBA"), dtype=np.uint8)
    return np.ascontiguousarray(arr[..., :3]), np.ascontiguousarray(arr[..., 3])


def load_image_rgba(path: Path) -> Tuple[U8Image, U8Mask]:
    """Load an image with Pillow, convert to RGBA, return (rgb, alpha)."""
    with Image.open(path) as im0:
        im0.load()
        return image_to_rgba_arrays(im0)


def decode_image_rgba(data: bytes) -> Tuple[U8Image, U8Mask]:
    """Same as load_image_rgba for in-memory bytes."""
    with Image.open(io.BytesIO(data)) as im0:
        im0.load()
        return image_to_rgba_arrays(im0)


def to_pil_rgba(rgb: U8Image, alpha: Optional[U8Mask] = None) -> Image.Image:
    assert_u8_image_rgb(rgb)
    H, W = int(rgb.shape[0]), int(rgb.shape[1])
    out = np.empty((H, W, 4), dtype=np.uint8)
    out[..., :3] = rgb[..., :3]
    out[..., 3] = 255 if alpha is None else alpha
    return Image.fromarray(out)


def save_png_rgba(path: Path, rgb: U8Image, alpha: Optional[U8Mask] = None) -> Path:
    """Save RGB and alpha arrays as a PNG file. Forces the .png suffix."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    to_pil_rgba(rgb, alpha).save(path, format="PNG")
    return path


def encode_png(rgb: U8Image, alpha: Optional[U8Mask] = None) -> bytes:
    buf = io.BytesIO()
    to_pil_rgba(rgb, alpha).save(buf, format="PNG")
    return buf.getvalue()


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "IMAGE_EXTS",
    "image_to_rgba_arrays",
    "load_image_rgba",
    "decode_image_rgba",
    "to_pil_rgba",
    "save_png_rgba",
    "encode_png",
    "is_image_file",
]
