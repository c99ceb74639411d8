# pixelcrush/utils.py
from __future__ import annotations

"""
Console helpers for the crush CLI and for library code run with debug=True.

Exports:
- format_seconds_compact(seconds) / format_total_duration_compact(seconds)
- colour_usage_report(mapped_rgb, alpha_mask=None) -> [(hex, count), ...]
- key_value_pairs_to_string(pairs), print_config_line(section, pairs, debug)
- print_progress_line(message, final=False), enable_line_buffered_stdout()
- print_banner, log, debug_log, warn, error
"""

import sys
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np

from .core_types import U8Image, U8Mask, rgb_to_hex


# Durations


def format_seconds_compact(seconds: float) -> str:
    """Stage timing for debug lines: 12.3ms, 4.567s or 2m 5.0s."""
    if seconds >= 60.0:
        whole_minutes, rest = divmod(seconds, 60.0)
        return f"{int(whole_minutes)}m {rest:.1f}s"
    if seconds >= 1.0:
        return f"{seconds:.3f}s"
    return f"{seconds * 1000.0:.1f}ms"


def format_total_duration_compact(seconds: float) -> str:
    """Per-file total: coarser than format_seconds_compact above a second."""
    if seconds >= 60.0:
        whole_minutes, rest = divmod(seconds, 60.0)
        return f"{int(whole_minutes)}m {int(round(rest))}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Palette usage


def colour_usage_report(
    mapped_rgb: U8Image, alpha_mask: Optional[U8Mask] = None
) -> List[Tuple[str, int]]:
    """
    How often each palette colour landed in a dithered output.

    Fully transparent pixels (alpha 0) are not counted. Most used first,
    ties broken by hex code so the listing is stable between runs.
    """
    rgb = mapped_rgb[..., :3]
    if alpha_mask is not None:
        rgb = rgb[alpha_mask > 0]
    flat = rgb.reshape(-1, 3)
    if flat.shape[0] == 0:
        return []
    colours, counts = np.unique(flat, axis=0, return_counts=True)
    pairs = [(rgb_to_hex(c), int(n)) for c, n in zip(colours.tolist(), counts)]
    return sorted(pairs, key=lambda item: (-item[1], item[0]))


# Value formatting


def format_bool_on_off(value: Any) -> str:
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Thousands separators for ints, trimmed decimals for floats."""
    if isinstance(value, bool):
        return format_bool_on_off(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0")
        return text.rstrip(".")
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """[("Grid", "24x16"), ("Palette", 5)] -> 'Grid: 24x16  Palette: 5'."""
    return sep.join(f"{name}{eq}{format_number_compact(value)}" for name, value in pairs)


# Console output


def print_progress_line(message: str, final: bool = False) -> None:
    """Rewrite the current terminal line (GIF encoding progress)."""
    sys.stdout.write(f"\r\033[K{message}")
    if final:
        sys.stdout.write("\n")
    sys.stdout.flush()


def enable_line_buffered_stdout() -> None:
    """Flush per line so progress shows up live when piped."""
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if not callable(reconfigure):
        return
    try:
        reconfigure(line_buffering=True, write_through=True)
    except (ValueError, OSError):
        pass


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """'[dither] Algorithm: ordered  Pixel size: 40', as debug or plain output."""
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    if debug:
        debug_log(line)
    else:
        log(line)


def print_banner(title: str) -> None:
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    print(message, flush=True)


def debug_log(message: str) -> None:
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Errors go to stderr so captured per-file stdout stays clean."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "format_total_duration_compact",
    "colour_usage_report",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "print_progress_line",
    "enable_line_buffered_stdout",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
