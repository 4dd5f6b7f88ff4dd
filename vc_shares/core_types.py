# vc_shares/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, error types and buffer validators.
"""

from dataclasses import dataclass
from typing import Any, Protocol, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .constants import MAX_SHARES, MIN_SHARES

# Basic aliases

U8RGBA = NDArray[np.uint8]  # (H, W, 4) pixel buffer, or (N, H, W, 4) share arena
U8Mask = NDArray[np.bool_]  # (H, W)
InkPattern = NDArray[np.uint8]  # (..., 4) ink bits, 1 = ink
SlotOrder = NDArray[np.intp]  # (..., 4) permutation of slot indices


class RandomSource(Protocol):
    """
    The subset of numpy.random.Generator the encoder draws from.

    uniform() feeds the dither threshold, permuted() the slot order and
    spawn() gives independent children to worker threads.
    """

    def uniform(self, low: float, high: float, size: Any = ...) -> Any: ...

    def permuted(self, x: Any, *, axis: Any = ...) -> Any: ...

    def spawn(self, n_children: int) -> Sequence["RandomSource"]: ...


# Errors


class ShareCountError(ValueError):
    """Share count outside the range a 2x2 block can serve."""


class BufferShapeError(ValueError):
    """Pixel buffer does not match the declared RGBA layout."""


# Value objects


@dataclass(frozen=True)
class EncodeSettings:
    """Share count and colour mode for one encoding job."""

    share_count: int = 2
    color: bool = True

    def __post_init__(self) -> None:
        check_share_count(self.share_count)


# Validators


def check_share_count(share_count: Any) -> int:
    """Return share_count as int, or raise ShareCountError if not in [2, 4]."""
    if isinstance(share_count, bool) or not isinstance(
        share_count, (int, np.integer)
    ):
        raise ShareCountError(
            f"share count must be an integer, got {type(share_count).__name__}"
        )
    n = int(share_count)
    if n < MIN_SHARES or n > MAX_SHARES:
        raise ShareCountError(
            f"share count must be between {MIN_SHARES} and {MAX_SHARES}, got {n}"
        )
    return n


def assert_u8_rgba(image: np.ndarray) -> U8RGBA:
    """Validate a non-empty uint8 (H,W,4) buffer and return it typed as U8RGBA."""
    if not isinstance(image, np.ndarray):
        raise BufferShapeError(f"expected numpy array, got {type(image).__name__}")
    if image.dtype != np.uint8:
        raise BufferShapeError(f"expected uint8 pixels, got {image.dtype}")
    if image.ndim != 3 or image.shape[-1] != 4:
        raise BufferShapeError(f"expected (H,W,4) RGBA buffer, got {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise BufferShapeError(f"empty buffer {image.shape[1]}x{image.shape[0]}")
    return image


def rgba_from_flat(
    data: Union[bytes, bytearray, memoryview, np.ndarray], width: int, height: int
) -> U8RGBA:
    """
    Wrap a flat RGBA byte buffer (row-major, 4 bytes/pixel) as (H,W,4).

    Raises BufferShapeError when the length does not equal width*height*4.
    """
    if width <= 0 or height <= 0:
        raise BufferShapeError(f"invalid dimensions {width}x{height}")
    if isinstance(data, np.ndarray):
        flat = np.ascontiguousarray(data, dtype=np.uint8).reshape(-1)
    else:
        flat = np.frombuffer(bytes(data), dtype=np.uint8)
    expected = int(width) * int(height) * 4
    if flat.size != expected:
        raise BufferShapeError(
            f"buffer holds {flat.size} bytes, {width}x{height} RGBA needs {expected}"
        )
    return flat.reshape(int(height), int(width), 4)


__all__ = [
    "U8RGBA",
    "U8Mask",
    "InkPattern",
    "SlotOrder",
    "RandomSource",
    "ShareCountError",
    "BufferShapeError",
    "EncodeSettings",
    "check_share_count",
    "assert_u8_rgba",
    "rgba_from_flat",
]
