# vc_shares/patterns.py
from __future__ import annotations

"""
Ink pattern generation for 2x2 visual secret sharing.

Per (pixel, channel) trial:
  1. Draw a dither threshold in [98, 158) and classify the intensity as dark
     (intensity < threshold) or light.
  2. Draw a random ordering of the four block slots.
  3. Light: every share inks the first two slots of the ordering.
     Dark: shares take adjacent pairs along the ordering treated as a ring,
     per DARK_COVERINGS, so the union covers all four slots.

Every share ends up with exactly two ink slots either way, so a single share
carries no information about the target.

The batched form works on any intensity array shape; each element is an
independent trial with its own threshold and slot order.
"""

from typing import Any, Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .constants import SLOTS_PER_BLOCK, THRESHOLD_CENTRE, THRESHOLD_SPREAD
from .core_types import InkPattern, RandomSource, SlotOrder, check_share_count

# Roles are positions in the shuffled slot order, not physical slots.
LIGHT_ROLES: Tuple[int, int] = (0, 1)

DARK_COVERINGS: Dict[int, Tuple[Tuple[int, int], ...]] = {
    2: ((0, 1), (2, 3)),
    3: ((0, 1), (1, 2), (2, 3)),
    4: ((0, 1), (1, 2), (2, 3), (3, 0)),
}


def draw_dark_targets(intensity: Any, rng: RandomSource) -> NDArray[np.bool_]:
    """Classify each intensity against its own threshold drawn from [98, 158)."""
    values = np.asarray(intensity, dtype=np.float64)
    thresholds = rng.uniform(
        THRESHOLD_CENTRE - THRESHOLD_SPREAD,
        THRESHOLD_CENTRE + THRESHOLD_SPREAD,
        size=values.shape,
    )
    return values < np.asarray(thresholds, dtype=np.float64)


def draw_slot_orders(shape: Tuple[int, ...], rng: RandomSource) -> SlotOrder:
    """Independent uniform permutations of the block slots, shape (*shape, 4)."""
    base = np.tile(np.arange(SLOTS_PER_BLOCK, dtype=np.intp), tuple(shape) + (1,))
    return np.asarray(rng.permuted(base, axis=-1), dtype=np.intp)


def ink_patterns(
    intensity: Any, share_count: int, rng: RandomSource
) -> InkPattern:
    """
    Batched pattern generator.

    Args:
      intensity   : scalar or array of channel values in 0..255
      share_count : 2, 3 or 4
      rng         : random source (numpy Generator API)

    Returns:
      uint8 [share_count, *intensity.shape, 4] ink bits (1 = ink).
    """
    n = check_share_count(share_count)
    values = np.asarray(intensity, dtype=np.float64)

    dark = draw_dark_targets(values, rng)
    order = draw_slot_orders(values.shape, rng)

    light_roles = np.asarray(LIGHT_ROLES, dtype=np.intp)
    out = np.zeros((n,) + values.shape + (SLOTS_PER_BLOCK,), dtype=np.uint8)
    for s, dark_roles in enumerate(DARK_COVERINGS[n]):
        roles = np.where(dark[..., None], np.asarray(dark_roles, np.intp), light_roles)
        slots = np.take_along_axis(order, roles, axis=-1)
        np.put_along_axis(out[s], slots, 1, axis=-1)
    return out


def generate_patterns(
    intensity: float, share_count: int, rng: Optional[RandomSource] = None
) -> InkPattern:
    """One trial for a single channel value. Returns uint8 [share_count, 4]."""
    if rng is None:
        rng = np.random.default_rng()
    return ink_patterns(float(intensity), share_count, rng)


__all__ = [
    "LIGHT_ROLES",
    "DARK_COVERINGS",
    "draw_dark_targets",
    "draw_slot_orders",
    "ink_patterns",
    "generate_patterns",
]
