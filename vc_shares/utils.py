# vc_shares/utils.py
from __future__ import annotations

"""
Shared utilities for vc_shares.

Includes duration formatting, row partitioning for threaded encoding,
worker defaults and tidy print-based logging.
"""

import os
import sys
from typing import Any, Iterable, List, Optional, TextIO, Tuple


#  Time / size formatting


def format_duration(seconds: float) -> str:
    """Human-friendly duration: '<ms>ms' under a second, '<s>s' under a minute, else 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.2f}s"
    minutes, rem = divmod(int(round(seconds)), 60)
    return f"{minutes}m {rem}s"


# Work splitting


def default_workers() -> int:
    """Leave a few cores free for the system; returns a sensible worker count."""
    n = os.cpu_count() or 4
    reserve = 1 if n <= 6 else 2 if n <= 12 else 3 if n <= 18 else 4
    return max(1, n - reserve)


def split_rows_into_parts(height: int, parts: int) -> List[Tuple[int, int]]:
    """Partition range [0, height) into ~parts contiguous [start, end) row spans."""
    if height <= 0:
        return []
    parts = max(1, int(parts))
    step = (height + parts - 1) // parts
    return [(start, min(start + step, height)) for start in range(0, height, step)]


#  CLI / progress logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live progress printing in terminals that expose .reconfigure().
    """
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def format_percentage(x: float, decimals: int = 1) -> str:
    """Format a 0..1 fraction as a percentage."""
    return f"{x * 100.0:.{decimals}f}%"


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str,
    pairs: Iterable[Tuple[str, Any]],
    debug: bool,
    file: Optional[TextIO] = None,
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [encode] Shares: 3  Colour: on  Size: 400x300  Workers: 4
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line, file=file)


# The line printers below write to `file` when given, else to the current
# sys.stdout. Threads must pass their own sink instead of swapping sys.stdout.


def print_banner(title: str, file: Optional[TextIO] = None) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", file=file, flush=True)


def log(message: str, file: Optional[TextIO] = None) -> None:
    """Plain log line."""
    print(message, file=file, flush=True)


def debug_log(message: str, file: Optional[TextIO] = None) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=file, flush=True)


def warn(message: str, file: Optional[TextIO] = None) -> None:
    """Warning log line."""
    print(f"[warn] {message}", file=file, flush=True)


def error(message: str, file: Optional[TextIO] = None) -> None:
    """Error log line; stderr unless a sink is given."""
    sink = file if file is not None else sys.stderr
    print(f"[error] {message}", file=sink, flush=True)


__all__ = [
    "format_duration",
    "default_workers",
    "split_rows_into_parts",
    "enable_line_buffered_stdout",
    "format_bool_on_off",
    "format_number_compact",
    "format_percentage",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
