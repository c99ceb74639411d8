# pixelcrush/animation.py
from __future__ import annotations

"""
Animated GIF assembly for already-dithered frames.

- FrameTimeline keeps an ordered list of captured frames (add, remove, move, clear).
- encode_gif() writes the frames with Pillow's GIF writer and reports progress.
- GifEncoder runs encode_gif() on a small thread pool and hands back a Future.

Frames must share one size. The GIF container itself is entirely Pillow's.
"""

import io
import itertools
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence

import numpy as np
from PIL import Image

from .constants import DEFAULT_FRAME_DELAY_MS, MIN_GIF_FRAMES
from .core_types import U8Image, assert_u8_image_rgb

ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class Frame:
    """One captured, already processed frame."""

    id: str
    rgb: U8Image  # (H, W, 3)

    @property
    def size(self) -> tuple[int, int]:
        return int(self.rgb.shape[1]), int(self.rgb.shape[0])


class FrameTimeline:
    """Ordered frames in display order."""

    def __init__(self) -> None:
        self._frames: List[Frame] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(list(self._frames))

    @property
    def frames(self) -> List[Frame]:
        return list(self._frames)

    def add(self, rgb: U8Image) -> Frame:
        """Capture a copy of rgb as the last frame."""
        assert_u8_image_rgb(rgb)
        frame = Frame(id=f"frame-{next(self._ids)}", rgb=np.array(rgb[..., :3], copy=True))
        self._frames.append(frame)
        return frame

    def remove(self, frame_id: str) -> bool:
        before = len(self._frames)
        self._frames = [f for f in self._frames if f.id != frame_id]
        return len(self._frames) != before

    def move(self, src: int, dst: int) -> None:
        if src == dst:
            return
        if not (0 <= src < len(self._frames) and 0 <= dst < len(self._frames)):
            raise IndexError(f"frame index out of range: {src} -> {dst}")
        frame = self._frames.pop(src)
        self._frames.insert(dst, frame)

    def clear(self) -> None:
        self._frames = []

    def arrays(self) -> List[U8Image]:
        return [f.rgb for f in self._frames]


def check_frames(frames: Sequence[U8Image], delay_ms: int) -> None:
    """Raise ValueError unless frames can form an animation."""
    if len(frames) < MIN_GIF_FRAMES:
        raise ValueError(f"need at least {MIN_GIF_FRAMES} frames, got {len(frames)}")
    if delay_ms <= 0:
        raise ValueError(f"frame delay must be positive, got {delay_ms}")
    first = assert_u8_image_rgb(frames[0]).shape[:2]
    for i, fr in enumerate(frames):
        if assert_u8_image_rgb(fr).shape[:2] != first:
            raise ValueError(
                f"frame {i} is {fr.shape[1]}x{fr.shape[0]}, expected {first[1]}x{first[0]}"
            )


def encode_gif(
    frames: Sequence[U8Image],
    delay_ms: int = DEFAULT_FRAME_DELAY_MS,
    on_progress: Optional[ProgressCallback] = None,
    *,
    loop: int = 0,
) -> bytes:
    """
    Encode frames (display order) into an animated GIF.
    Progress goes through on_progress as fractions, finishing at 1.0.

    Pillow folds identical consecutive frames into one and adds up their
    delays, so the file can hold fewer frames than were passed while the
    playback time stays len(frames) * delay_ms.
    """
    check_frames(frames, delay_ms)
    total = len(frames) + 1
    images: List[Image.Image] = []
    for i, fr in enumerate(frames):
        rgb = np.ascontiguousarray(fr[..., :3])
        images.append(
            Image.fromarray(rgb).quantize(
                colors=256,
                method=Image.Quantize.MEDIANCUT,
                dither=Image.Dither.NONE,
            )
        )
        if on_progress is not None:
            on_progress((i + 1) / total)

    buf = io.BytesIO()
    images[0].save(
        buf,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=int(delay_ms),
        loop=loop,
        optimize=False,
    )
    if on_progress is not None:
        on_progress(1.0)
    return buf.getvalue()


class GifEncoder:
    """Background GIF encoding. Use as a context manager or call close()."""

    def __init__(self, workers: int = 2, loop: int = 0) -> None:
        self._pool = ThreadPoolExecutor(max_workers=max(1, int(workers)))
        self.loop = loop

    def render(
        self,
        frames: Sequence[U8Image],
        delay_ms: int = DEFAULT_FRAME_DELAY_MS,
        on_progress: Optional[ProgressCallback] = None,
    ) -> "Future[bytes]":
        """
        Validate now, encode in the background. The Future resolves to the GIF
        bytes; encoding errors surface from Future.result(). Repeated frames
        are folded as in encode_gif().
        """
        check_frames(frames, delay_ms)
        snapshot = [np.array(fr[..., :3], copy=True) for fr in frames]
        return self._pool.submit(
            encode_gif, snapshot, delay_ms, on_progress, loop=self.loop
        )

    def close(self) -> None:
        self._pool.shutdown(wait=True)

    def __enter__(self) -> "GifEncoder":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


__all__ = [
    "Frame",
    "FrameTimeline",
    "ProgressCallback",
    "check_frames",
    "encode_gif",
    "GifEncoder",
]
