# vc_shares/__init__.py
"""
vc_shares package.

Purpose:
  Visual secret sharing with 2x2 subpixel expansion. Splits an RGBA image into
  2..4 noise-like shares that reveal the image when overlaid. See
  make_shares.py for the CLI.

Public API:
  encode_shares        : RGBA buffer -> (N, 2H, 2W, 4) share arena.
  encode_with_settings : same, driven by an EncodeSettings value.
  generate_patterns    : one (pixel, channel) trial -> (N, 4) ink bits.
  ink_patterns         : batched trials over an intensity array.
  write_block          : commit one pixel's ink bits to a share buffer.
  stack_shares         : multiply-composite shares into a preview.
  image_io             : load / fit / save helpers (Pillow).
  utils                : formatting, row splitting and logging helpers.

Quick start:
  from vc_shares import encode_shares, stack_shares
  shares = encode_shares(rgba, 3, color=True, seed=7)
  preview = stack_shares(shares)
"""

__version__ = "0.1.0"

from . import constants
from . import core_types
from . import image_io
from . import utils

from .core_types import (  # noqa: E402,F401
    BufferShapeError,
    EncodeSettings,
    ShareCountError,
    rgba_from_flat,
)
from .patterns import generate_patterns, ink_patterns  # noqa: E402,F401
from .blocks import write_block, write_blocks  # noqa: E402,F401
from .encode import encode_shares, encode_with_settings  # noqa: E402,F401
from .stack import ink_coverage, stack_shares  # noqa: E402,F401

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "image_io",
    "utils",
    "BufferShapeError",
    "EncodeSettings",
    "ShareCountError",
    "rgba_from_flat",
    "generate_patterns",
    "ink_patterns",
    "write_block",
    "write_blocks",
    "encode_shares",
    "encode_with_settings",
    "ink_coverage",
    "stack_shares",
]
