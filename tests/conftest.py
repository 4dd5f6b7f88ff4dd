from __future__ import annotations

from typing import Sequence

import numpy as np
import pytest


class FixedRandom:
    """Random source stand-in: constant threshold, same slot order every trial."""

    def __init__(self, threshold: float = 128.0, order: Sequence[int] = (0, 1, 2, 3)):
        self.threshold = float(threshold)
        self.order = np.asarray(order, dtype=np.intp)

    def uniform(self, low, high, size=None):
        shape = () if size is None else size
        return np.full(shape, self.threshold, dtype=np.float64)

    def permuted(self, x, *, axis=None):
        return np.broadcast_to(self.order, np.shape(x)).copy()

    def spawn(self, n_children):
        return [self] * n_children


def _block_ink(arena: np.ndarray) -> np.ndarray:
    """(N,2H,2W,4) share arena -> (N,H,W,3,4) ink bits, slot = dy * 2 + dx."""
    n, h2, w2, _ = arena.shape
    h, w = h2 // 2, w2 // 2
    ink = (arena[..., :3] == 0).astype(np.uint8)
    return ink.reshape(n, h, 2, w, 2, 3).transpose(0, 1, 3, 5, 2, 4).reshape(
        n, h, w, 3, 4
    )


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def block_ink():
    return _block_ink


@pytest.fixture
def solid():
    def make(rgba, width=1, height=1):
        img = np.empty((height, width, 4), dtype=np.uint8)
        img[...] = np.asarray(rgba, dtype=np.uint8)
        return img

    return make
