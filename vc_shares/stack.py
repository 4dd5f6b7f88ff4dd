# vc_shares/stack.py
from __future__ import annotations

"""
Stacking simulation: multiply-composite shares the way overlaid transparencies
combine. Transparent share subpixels leave the layers below untouched.
"""

from typing import Sequence, Union

import numpy as np

from .core_types import BufferShapeError, U8RGBA


def stack_shares(shares: Union[U8RGBA, Sequence[U8RGBA]]) -> U8RGBA:
    """
    Multiply-composite shares over white.

    Args:
      shares : uint8 [N,H,W,4] arena or a sequence of equally sized (H,W,4) buffers

    Returns:
      uint8 [H,W,4]; RGB is the product of opaque layers, alpha the max alpha.
    """
    arr = np.asarray(shares)
    if arr.dtype != np.uint8 or arr.ndim != 4 or arr.shape[-1] != 4:
        raise BufferShapeError(f"expected uint8 (N,H,W,4) shares, got {arr.shape}")
    if arr.shape[0] == 0:
        raise BufferShapeError("nothing to stack")

    opaque = arr[..., 3:4] > 0
    factors = np.where(opaque, arr[..., :3].astype(np.float64) / 255.0, 1.0)
    rgb = np.prod(factors, axis=0)

    out = np.empty(arr.shape[1:], dtype=np.uint8)
    out[..., :3] = np.clip(np.rint(rgb * 255.0), 0, 255).astype(np.uint8)
    out[..., 3] = arr[..., 3].max(axis=0)
    return out


def ink_coverage(stacked: U8RGBA) -> float:
    """Fraction of opaque subpixels that are black on every channel."""
    opaque = stacked[..., 3] > 0
    total = int(np.count_nonzero(opaque))
    if total == 0:
        return 0.0
    black = np.all(stacked[..., :3] == 0, axis=-1) & opaque
    return int(np.count_nonzero(black)) / total


__all__ = ["stack_shares", "ink_coverage"]
