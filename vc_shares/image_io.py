# vc_shares/image_io.py
from __future__ import annotations

import io
from fractions import Fraction
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import U8RGBA, assert_u8_rgba

"""
Image I/O helpers (RGBA in sRGB), fit-to-box downscaling and PNG export.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is not None:
                return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            pass

    return im.convert("RGBA")


def load_image_rgba(path: Path) -> U8RGBA:
    """Load any Pillow-readable image as uint8 [H,W,4] sRGB RGBA."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
    return np.array(im, dtype=np.uint8)


def pillow_resample_from_name(name: str) -> Image.Resampling:
    """Map a string to a Pillow resampling filter enum."""
    if name == "nearest":
        return Image.Resampling.NEAREST
    if name == "bilinear":
        return Image.Resampling.BILINEAR
    if name == "bicubic":
        return Image.Resampling.BICUBIC
    if name == "lanczos":
        return Image.Resampling.LANCZOS
    return Image.Resampling.BILINEAR  # default


def fit_within(
    rgba: U8RGBA,
    max_width: Optional[int],
    max_height: Optional[int],
    resample: Image.Resampling = Image.Resampling.BILINEAR,
) -> U8RGBA:
    """
    Downscale so the image fits the box, keeping aspect ratio. Never upscales.
    A None or non-positive limit leaves that axis unconstrained.
    """
    src = assert_u8_rgba(rgba)
    H0, W0 = src.shape[:2]
    ratios = [Fraction(1)]
    if max_width is not None and max_width > 0:
        ratios.append(Fraction(int(max_width), W0))
    if max_height is not None and max_height > 0:
        ratios.append(Fraction(int(max_height), H0))
    ratio = min(ratios)
    if ratio >= 1:
        return src

    dst_w = max(1, int(W0 * ratio))
    dst_h = max(1, int(H0 * ratio))
    im = Image.fromarray(src)
    return np.array(im.resize((dst_w, dst_h), resample=resample), dtype=np.uint8)


def save_rgba_png(path: Path, rgba: U8RGBA) -> Path:
    """Write an RGBA buffer as PNG; a non-.png suffix is replaced."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    Image.fromarray(assert_u8_rgba(rgba)).save(path)
    return path


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "load_image_rgba",
    "pillow_resample_from_name",
    "fit_within",
    "save_rgba_png",
    "is_image_file",
]
