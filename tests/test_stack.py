from __future__ import annotations

import numpy as np
import pytest

from vc_shares.core_types import BufferShapeError
from vc_shares.encode import encode_shares
from vc_shares.stack import ink_coverage, stack_shares


@pytest.mark.parametrize("n", [2, 3, 4])
def test_dark_pixel_stacks_to_black(n, solid):
    shares = encode_shares(solid((0, 0, 0, 255)), n, seed=n)
    stacked = stack_shares(shares)
    assert stacked.shape == (2, 2, 4)
    assert not stacked[..., :3].any()
    assert np.all(stacked[..., 3] == 255)
    assert ink_coverage(stacked) == 1.0


@pytest.mark.parametrize("n", [2, 3, 4])
def test_light_pixel_stacks_to_half_cover(n, solid):
    shares = encode_shares(solid((255, 255, 255, 255)), n, seed=n)
    stacked = stack_shares(shares)
    for ch in range(3):
        values = stacked[..., ch].ravel()
        assert sorted(values.tolist()) == [0, 0, 255, 255]


def test_transparent_layers_leave_white_and_clear(solid):
    shares = encode_shares(solid((0, 0, 0, 10), 2, 2), 3, seed=0)
    stacked = stack_shares(shares)
    assert np.all(stacked[..., :3] == 255)
    assert not stacked[..., 3].any()
    assert ink_coverage(stacked) == 0.0


def test_sequence_and_arena_agree(rng):
    img = rng.integers(0, 256, size=(5, 4, 4), dtype=np.uint8)
    shares = encode_shares(img, 3, seed=5)
    assert np.array_equal(stack_shares(shares), stack_shares(list(shares)))


def test_multiply_blend_of_partial_values():
    a = np.array([[[128, 255, 0, 255]]], dtype=np.uint8)
    b = np.array([[[128, 0, 255, 255]]], dtype=np.uint8)
    stacked = stack_shares([a, b])
    assert stacked[0, 0].tolist() == [64, 0, 0, 255]


@pytest.mark.parametrize(
    "bad",
    [
        np.zeros((0, 2, 2, 4), dtype=np.uint8),
        np.zeros((2, 2, 4), dtype=np.uint8),
        np.zeros((2, 2, 2, 4), dtype=np.float64),
    ],
)
def test_rejects_bad_share_sets(bad):
    with pytest.raises(BufferShapeError):
        stack_shares(bad)
