# vc_shares/constants.py
from __future__ import annotations

"""
Tunables shared by the encoder, the stacker and the CLI.
"""

from typing import Tuple

# Share count range supported by a 2x2 block with two ink subpixels per share.
MIN_SHARES = 2
MAX_SHARES = 4

# Subpixels per block.
SLOTS_PER_BLOCK = 4

# Block expansion factor (each source pixel becomes BLOCK x BLOCK).
BLOCK = 2

# (dx, dy) offset of each slot inside its block: TL, TR, BL, BR.
SLOT_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, 0), (1, 0), (0, 1), (1, 1))

# Dither threshold: drawn uniformly from [CENTRE - SPREAD, CENTRE + SPREAD).
THRESHOLD_CENTRE = 128.0
THRESHOLD_SPREAD = 30.0

# Source pixels with alpha below this are treated as transparent.
ALPHA_CUTOFF = 50

# Rec. 601 luma weights used when colour mode is off.
LUMA_WEIGHTS: Tuple[float, float, float] = (0.299, 0.587, 0.114)

# Default box the CLI fits source images into before encoding.
DEFAULT_MAX_SIZE = 400

# Row band height below which threading is not worth it.
MIN_ROWS_PER_WORKER = 16

__all__ = [
    "MIN_SHARES",
    "MAX_SHARES",
    "SLOTS_PER_BLOCK",
    "BLOCK",
    "SLOT_OFFSETS",
    "THRESHOLD_CENTRE",
    "THRESHOLD_SPREAD",
    "ALPHA_CUTOFF",
    "LUMA_WEIGHTS",
    "DEFAULT_MAX_SIZE",
    "MIN_ROWS_PER_WORKER",
]
