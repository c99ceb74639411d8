#!/usr/bin/env python3
"""
crush.py
Turn images into dithered low-colour pixel art.

Usage:
  python crush.py INPUT [--outdir DIR] [--palette NAME|HEX,HEX,...] [--extract N]
                  [--pixel-size P] [--algorithm floyd-steinberg|ordered]
                  [--palette-mode nearest|luminance|gradient-horizontal|gradient-vertical]
                  [--gif OUT.gif] [--delay MS] [--jobs J] [--debug]

Input:
  A Pillow-readable image or a folder of images. Alpha is carried through.

Output:
  PNG per input, written as <stem>_crushed.png next to the input or into --outdir.
  With --gif, the processed images (sorted by file name) also become the frames
  of one animated GIF.

Notes:
  --extract N derives an N-colour palette from each input (median cut) and
  ignores --palette. Pixel size and colour count are clamped to their ranges.
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from concurrent.futures import ProcessPoolExecutor
from contextlib import redirect_stdout
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pixelcrush.animation import GifEncoder
from pixelcrush.constants import DEFAULT_FRAME_DELAY_MS
from pixelcrush.core_types import DITHER_MODES, PALETTE_MODES, U8Image, palette_to_hex
from pixelcrush.extract import extract_palette
from pixelcrush.image_io import IMAGE_EXTS, load_image_rgba, save_png_rgba
from pixelcrush.palette_data import PALETTES, resolve_palette
from pixelcrush.pipeline import process_with_settings
from pixelcrush.settings import DitherSettings, clamp_colour_count, make_settings
from pixelcrush.utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    print_progress_line,
    warn,
)

OUTPUT_SUFFIX = "_crushed"

# CLI args


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        palette: built-in name or comma-separated hex list
        extract: None or colour count for automatic extraction
        pixel_size: working grid percent
        algorithm / palette_mode: mode names
        gif: optional Path for an animated GIF of all outputs
        delay: GIF frame delay in ms
        jobs: parallel file workers
        debug: verbose details
    """
    parser = argparse.ArgumentParser(
        prog="pixelcrush",
        description="Pixelate and dither image(s) onto a small palette.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--palette",
        default="default",
        help=f"Palette name ({', '.join(sorted(PALETTES))}) or comma-separated hex list.",
    )
    parser.add_argument(
        "--extract",
        type=int,
        default=None,
        metavar="N",
        help="Extract an N-colour palette from each image instead of --palette.",
    )
    parser.add_argument(
        "--pixel-size",
        type=float,
        default=40,
        help="Working grid size in percent of the source (10-100).",
    )
    parser.add_argument(
        "--algorithm", choices=list(DITHER_MODES), default="floyd-steinberg"
    )
    parser.add_argument(
        "--palette-mode", choices=list(PALETTE_MODES), default="nearest"
    )
    parser.add_argument(
        "--gif", type=Path, default=None, help="Also write an animated GIF of all outputs"
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=DEFAULT_FRAME_DELAY_MS,
        help="GIF frame delay in milliseconds.",
    )
    parser.add_argument("--jobs", type=int, default=2, help="Files processed in parallel")
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> DitherSettings:
    """Settings shared by every file; --extract swaps the palette per file later."""
    return make_settings(
        pixel_size=args.pixel_size,
        algorithm=args.algorithm,
        palette_mode=args.palette_mode,
        palette=resolve_palette(args.palette),
    )


def collect_inputs(src: Path, skip: Optional[Path] = None) -> List[Path]:
    """
    Single file, or the image files of a folder sorted by name.
    Our own PNG outputs and the skip path (the --gif target) are left out.
    """
    if not src.is_dir():
        return [src]
    skip_resolved = skip.resolve() if skip is not None else None
    files = [
        p
        for p in src.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.stem.endswith(OUTPUT_SUFFIX)
        and p.resolve() != skip_resolved
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


def output_path_for(src_path: Path, outdir: Optional[Path]) -> Path:
    name = f"{src_path.stem}{OUTPUT_SUFFIX}.png"
    return (outdir / name) if outdir else src_path.with_name(name)


# Per-file processing


def process_single_image(
    src_path: Path,
    out_path: Path,
    settings: DitherSettings,
    extract_count: Optional[int],
    debug: bool,
) -> U8Image:
    """
    Process one file end-to-end:
      load -> optional palette extraction -> pixelate + dither -> save -> report.
    Returns the processed RGB buffer.
    """
    t_start = time.perf_counter()
    print_banner(src_path.name)

    rgb_in, alpha = load_image_rgba(src_path)
    height, width = rgb_in.shape[0], rgb_in.shape[1]
    if debug:
        debug_log(key_value_pairs_to_string([("Loaded", f"{width}x{height}")]))

    if extract_count is not None:
        count = clamp_colour_count(extract_count)
        extracted = extract_palette(rgb_in, alpha, count, debug=debug)
        settings = settings.with_palette(palette_to_hex(extracted))
        log(f"Extracted palette: {' '.join(settings.palette)}")

    print_config_line(
        "dither",
        [
            ("Algorithm", settings.algorithm),
            ("Palette mode", settings.palette_mode),
            ("Pixel size", settings.pixel_size),
            ("Colours", len(settings.palette)),
        ],
        debug=debug,
    )

    rgb_out, alpha_out = process_with_settings(rgb_in, settings, alpha, debug=debug)
    written = save_png_rgba(out_path, rgb_out, alpha_out)

    log(f"Wrote {written.name} | size={width}x{height}")
    log("Colours used:")
    for hex_code, count in colour_usage_report(rgb_out, alpha_out):
        log(f"  {hex_code}: {count:,}")
    log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")
    return rgb_out


def _process_one_captured(
    path: Path,
    outdir: Optional[Path],
    settings: DitherSettings,
    extract_count: Optional[int],
    debug: bool,
) -> Tuple[str, Optional[U8Image], Optional[str]]:
    """
    Process a single file with stdout capture, so parallel jobs print in order.

    Returns (captured stdout, frame, failure). A failed file yields no frame and
    its message is handed back instead of printed, so main() can report it on
    stderr right after that file's captured output.
    """
    buf = io.StringIO()
    frame: Optional[U8Image] = None
    failure: Optional[str] = None
    with redirect_stdout(buf):
        try:
            frame = process_single_image(
                path, output_path_for(path, outdir), settings, extract_count, debug
            )
        except (OSError, ValueError) as e:
            failure = f"{path.name}: {e}"
    return buf.getvalue(), frame, failure


def write_gif(gif_path: Path, frames: List[U8Image], delay_ms: int) -> None:
    """Assemble frames into gif_path, skipping frames whose size differs from the first."""
    if not frames:
        warn("no frames to animate")
        return
    first = frames[0].shape[:2]
    usable = [f for f in frames if f.shape[:2] == first]
    if len(usable) != len(frames):
        warn(f"skipped {len(frames) - len(usable)} frame(s) with a different size")
    if len(usable) < 2:
        warn("need at least two same-size frames for a GIF")
        return

    def on_progress(p: float) -> None:
        print_progress_line(f"GIF {p:.0%}", final=p >= 1.0)

    with GifEncoder() as encoder:
        data = encoder.render(usable, delay_ms, on_progress).result()
    gif_path.write_bytes(data)
    log(f"Wrote {gif_path.name} | frames={len(usable)} | delay={delay_ms}ms")


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Handles a single file or a folder. In folder mode supports --jobs parallelism
    while keeping output in file order.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    try:
        settings = build_settings(args)
    except ValueError as e:
        error(str(e))
        return 2

    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    files = collect_inputs(src, skip=args.gif)
    print_config_line(
        "run",
        [("Images", len(files)), ("Jobs", args.jobs), ("Extract", args.extract or "-")],
        debug=False,
    )

    jobs = max(1, int(args.jobs))
    if jobs == 1 or len(files) <= 1:
        results = [
            _process_one_captured(p, args.outdir, settings, args.extract, args.debug)
            for p in files
        ]
    else:
        with ProcessPoolExecutor(max_workers=jobs) as ex:
            futures = [
                ex.submit(
                    _process_one_captured,
                    p,
                    args.outdir,
                    settings,
                    args.extract,
                    args.debug,
                )
                for p in files
            ]
            results = [f.result() for f in futures]

    frames: List[U8Image] = []
    for text, frame, failure in results:
        print(text, end="", flush=True)
        if failure is not None:
            error(failure)
        if frame is not None:
            frames.append(frame)

    if args.gif is not None:
        write_gif(args.gif, frames, args.delay)

    return 0 if len(frames) == len(files) else 1


if __name__ == "__main__":
    sys.exit(main())
