from __future__ import annotations

import numpy as np
import pytest

from vc_shares.core_types import ShareCountError
from vc_shares.patterns import (
    DARK_COVERINGS,
    draw_dark_targets,
    draw_slot_orders,
    generate_patterns,
    ink_patterns,
)


@pytest.mark.parametrize("n", [2, 3, 4])
def test_every_share_has_two_ink_slots(n, rng):
    values = rng.uniform(0, 256, size=(40, 3))
    patterns = ink_patterns(values, n, rng)
    assert patterns.shape == (n, 40, 3, 4)
    assert np.all(patterns.sum(axis=-1) == 2)


@pytest.mark.parametrize("n", [2, 3, 4])
def test_light_shares_are_identical(n, rng):
    # 255 is above every possible threshold
    patterns = ink_patterns(np.full(200, 255.0), n, rng)
    for s in range(1, n):
        assert np.array_equal(patterns[s], patterns[0])


@pytest.mark.parametrize("n", [2, 3, 4])
def test_dark_shares_cover_block(n, rng):
    # 0 is below every possible threshold
    patterns = ink_patterns(np.zeros(200), n, rng)
    union = patterns.max(axis=0)
    assert np.all(union == 1)
    assert np.all(patterns.sum(axis=-1) == 2)


def test_dark_two_shares_are_complementary(rng):
    patterns = ink_patterns(np.zeros(100), 2, rng)
    assert np.all(patterns[0] + patterns[1] == 1)


def test_four_share_ring_follows_slot_order(fixed_random):
    src = fixed_random(threshold=200.0, order=(2, 0, 3, 1))
    patterns = generate_patterns(10, 4, src)
    expected = np.array(
        [
            [1, 0, 1, 0],  # {2, 0}
            [1, 0, 0, 1],  # {0, 3}
            [0, 1, 0, 1],  # {3, 1}
            [0, 1, 1, 0],  # {1, 2}
        ],
        dtype=np.uint8,
    )
    assert np.array_equal(patterns, expected)


def test_three_share_chain(fixed_random):
    patterns = generate_patterns(0, 3, fixed_random(threshold=128.0))
    expected = np.array(
        [[1, 1, 0, 0], [0, 1, 1, 0], [0, 0, 1, 1]],
        dtype=np.uint8,
    )
    assert np.array_equal(patterns, expected)


def test_light_uses_first_two_slots_of_order(fixed_random):
    patterns = generate_patterns(250, 3, fixed_random(threshold=128.0, order=(3, 1, 0, 2)))
    assert np.array_equal(patterns, np.tile([0, 1, 0, 1], (3, 1)).astype(np.uint8))


def test_threshold_comparison_is_strict(fixed_random):
    src = fixed_random(threshold=128.0)
    dark = draw_dark_targets(np.array([127.9, 128.0, 128.1]), src)
    assert dark.tolist() == [True, False, False]


def test_threshold_stays_within_dither_band(rng):
    always_dark = draw_dark_targets(np.full(5000, 97.99), rng)
    always_light = draw_dark_targets(np.full(5000, 158.0), rng)
    assert always_dark.all()
    assert not always_light.any()


def test_threshold_actually_varies(rng):
    dark = draw_dark_targets(np.full(5000, 128.0), rng)
    frac = dark.mean()
    assert 0.4 < frac < 0.6


def test_slot_orders_are_permutations(rng):
    orders = draw_slot_orders((50, 3), rng)
    assert orders.shape == (50, 3, 4)
    assert np.array_equal(np.sort(orders, axis=-1), np.broadcast_to(np.arange(4), orders.shape))
    # every slot shows up first at some point
    assert set(orders[..., 0].ravel().tolist()) == {0, 1, 2, 3}


def test_covering_table_is_complete():
    for n, roles in DARK_COVERINGS.items():
        assert len(roles) == n
        assert set().union(*map(set, roles)) == {0, 1, 2, 3}
        assert all(len(set(pair)) == 2 for pair in roles)


def test_default_random_source():
    patterns = generate_patterns(0, 2)
    assert patterns.shape == (2, 4)
    assert np.all(patterns.sum(axis=0) == 1)


@pytest.mark.parametrize("bad", [0, 1, 5, 8, -2, 2.0, True, "3", None])
def test_rejects_unsupported_share_counts(bad, fixed_random):
    with pytest.raises(ShareCountError):
        generate_patterns(0, bad, fixed_random())


def test_share_count_error_is_value_error():
    assert issubclass(ShareCountError, ValueError)
