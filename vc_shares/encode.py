# vc_shares/encode.py
from __future__ import annotations

"""
Share encoder entry point.

Splits an RGBA pixel buffer into 2..4 shares. Every source pixel becomes a
2x2 block in each share; each of R, G, B is an independent randomized trial
(also in mono mode, where all three carry the same luminance).

Work is done in row bands. With workers > 1 the bands run on a thread pool,
each with its own child generator, and write disjoint rows of one
preallocated share arena.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional, TextIO
import time

import numpy as np

from .blocks import write_blocks
from .constants import ALPHA_CUTOFF, BLOCK, LUMA_WEIGHTS, MIN_ROWS_PER_WORKER
from .core_types import (
    EncodeSettings,
    RandomSource,
    U8RGBA,
    assert_u8_rgba,
    check_share_count,
)
from .patterns import ink_patterns
from .utils import format_duration, print_config_line, split_rows_into_parts


def channel_values(rgba: U8RGBA, color: bool) -> np.ndarray:
    """Per-pixel channel intensities, float64 [H,W,3]."""
    rgb = rgba[..., :3].astype(np.float64)
    if color:
        return rgb
    lum = rgb @ np.asarray(LUMA_WEIGHTS, dtype=np.float64)
    return np.repeat(lum[..., None], 3, axis=-1)


def transparent_mask(rgba: U8RGBA) -> np.ndarray:
    """True where the source alpha is below the cut-off."""
    return rgba[..., 3] < ALPHA_CUTOFF


def _encode_band(
    src_band: U8RGBA,
    arena_band: U8RGBA,
    share_count: int,
    color: bool,
    rng: RandomSource,
) -> None:
    ink = ink_patterns(channel_values(src_band, color), share_count, rng)
    write_blocks(arena_band, ink, transparent_mask(src_band))


def _band_count(height: int, workers: int) -> int:
    return max(1, min(int(workers), height // MIN_ROWS_PER_WORKER))


def encode_shares(
    rgba: U8RGBA,
    share_count: int,
    color: bool = True,
    *,
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None,
    workers: int = 1,
    debug: bool = False,
    log_file: Optional[TextIO] = None,
) -> U8RGBA:
    """
    Encode an RGBA image into visual shares.

    Args:
      rgba        : uint8 [H,W,4] source pixels
      share_count : 2, 3 or 4
      color       : False encodes luminance on all three channels
      rng         : random source; defaults to numpy.random.default_rng(seed)
      seed        : seed for the default generator
      workers     : row-band threads
      debug       : print one config/timing line
      log_file    : stream for the debug line (default: sys.stdout)

    Returns:
      uint8 [share_count, 2H, 2W, 4]; index 0 is the first share.

    Raises:
      ShareCountError  : share_count not in [2, 4] (checked before anything else)
      BufferShapeError : rgba is not a non-empty uint8 (H,W,4) array
    """
    n = check_share_count(share_count)
    src = assert_u8_rgba(rgba)
    t0 = time.perf_counter()

    if rng is None:
        rng = np.random.default_rng(seed)

    height, width = src.shape[:2]
    arena = np.zeros((n, height * BLOCK, width * BLOCK, 4), dtype=np.uint8)

    spans = split_rows_into_parts(height, _band_count(height, workers))
    if len(spans) == 1:
        _encode_band(src, arena, n, bool(color), rng)
    else:
        children = rng.spawn(len(spans))
        with ThreadPoolExecutor(max_workers=len(spans)) as pool:
            futures = [
                pool.submit(
                    _encode_band,
                    src[y0:y1],
                    arena[:, y0 * BLOCK : y1 * BLOCK],
                    n,
                    bool(color),
                    child,
                )
                for (y0, y1), child in zip(spans, children)
            ]
            for fut in futures:
                fut.result()

    if debug:
        print_config_line(
            "encode",
            [
                ("Shares", n),
                ("Colour", bool(color)),
                ("Size", f"{width}x{height}"),
                ("Bands", len(spans)),
                ("Time", format_duration(time.perf_counter() - t0)),
            ],
            debug=True,
            file=log_file,
        )
    return arena


def encode_with_settings(
    rgba: U8RGBA,
    settings: EncodeSettings,
    *,
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None,
    workers: int = 1,
    debug: bool = False,
    log_file: Optional[TextIO] = None,
) -> U8RGBA:
    """encode_shares() driven by an EncodeSettings value."""
    return encode_shares(
        rgba,
        settings.share_count,
        settings.color,
        rng=rng,
        seed=seed,
        workers=workers,
        debug=debug,
        log_file=log_file,
    )


__all__ = [
    "channel_values",
    "transparent_mask",
    "encode_shares",
    "encode_with_settings",
]
