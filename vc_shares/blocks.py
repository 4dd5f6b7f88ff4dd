# vc_shares/blocks.py
from __future__ import annotations

"""
Block writer: turns per-channel ink bits into 2x2 RGBA blocks.

Ink maps to 0 and clear maps to 255 so that multiply compositing of stacked
shares darkens exactly the inked subpixels. Transparent source pixels become
(0, 0, 0, 0) in every slot.
"""

from typing import Sequence

import numpy as np

from .constants import BLOCK, SLOT_OFFSETS
from .core_types import InkPattern, U8Mask, U8RGBA


def write_block(
    share: U8RGBA,
    x: int,
    y: int,
    ink_r: Sequence[int],
    ink_g: Sequence[int],
    ink_b: Sequence[int],
    transparent: bool,
) -> None:
    """Write the block for source pixel (x, y) into one (2H,2W,4) share."""
    for slot, (dx, dy) in enumerate(SLOT_OFFSETS):
        ty = y * BLOCK + dy
        tx = x * BLOCK + dx
        if transparent:
            share[ty, tx] = (0, 0, 0, 0)
        else:
            share[ty, tx] = (
                (1 - int(ink_r[slot])) * 255,
                (1 - int(ink_g[slot])) * 255,
                (1 - int(ink_b[slot])) * 255,
                255,
            )


def write_blocks(arena: U8RGBA, ink: InkPattern, transparent: U8Mask) -> None:
    """
    Write a band of blocks for all shares at once.

    Args:
      arena       : uint8 [N, 2h, 2W, 4], written in place (may be a view)
      ink         : uint8 [N, h, W, 3, 4], channel-major ink bits per pixel
      transparent : bool [h, W]
    """
    n, h, w = ink.shape[:3]
    if arena.shape != (n, h * BLOCK, w * BLOCK, 4):
        raise ValueError(
            f"arena shape {arena.shape} does not fit ink shape {ink.shape}"
        )

    colour = np.uint8(255) * (np.uint8(1) - ink.astype(np.uint8, copy=False))
    # (n, h, w, ch, dy, dx) -> (n, h, dy, w, dx, ch); slot index is dy * 2 + dx
    tiles = colour.reshape(n, h, w, 3, BLOCK, BLOCK).transpose(0, 1, 4, 2, 5, 3)
    arena[..., :3] = tiles.reshape(n, h * BLOCK, w * BLOCK, 3)
    arena[..., 3] = 255

    if np.any(transparent):
        mask = np.repeat(np.repeat(transparent, BLOCK, axis=0), BLOCK, axis=1)
        arena[:, mask] = 0


__all__ = ["write_block", "write_blocks"]
