#!/usr/bin/env python3
"""
make_shares.py
Split images into visual secret-sharing shares (2x2 subpixel expansion).

Usage:
  python make_shares.py INPUT [--outdir DIR] --shares [2|3|4] --mono --max-size N
                        --resample [nearest|bilinear|bicubic|lanczos] --seed S
                        --workers W --jobs J --stack --debug

Input:
  Any Pillow-readable image, or a folder of them. Pixels with alpha < 50 stay
  transparent in every share.

Output:
  <stem>_share_1.png .. <stem>_share_N.png next to INPUT (or in --outdir),
  each twice the (fitted) source size. --stack also writes <stem>_stacked.png,
  the multiply-composite of all shares.

Notes:
  Encoding lives in vc_shares.encode; I/O in vc_shares.image_io.
  Shares are meant to be printed on transparencies or overlaid with a
  multiply blend. Any single share is noise.
"""

from __future__ import annotations

import argparse
import io
import re
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Tuple

import numpy as np

from vc_shares.constants import DEFAULT_MAX_SIZE, MAX_SHARES, MIN_SHARES
from vc_shares.encode import encode_shares, transparent_mask
from vc_shares.image_io import (
    fit_within,
    is_image_file,
    load_image_rgba,
    pillow_resample_from_name,
    save_rgba_png,
)
from vc_shares.stack import ink_coverage, stack_shares
from vc_shares.utils import (
    # formatting
    format_duration,
    format_percentage,
    # work splitting
    default_workers,
    # pretty logging
    debug_log,
    enable_line_buffered_stdout,
    error,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif"}
OUTPUT_STEM_RE = re.compile(r"_(share_\d+|stacked)$")


# CLI args & small helpers


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for share generation.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        shares: share count (2..4)
        mono: encode luminance on all channels
        max_size: fit box edge in pixels (<=0 disables)
        resample: resize filter name
        seed: optional int seed
        jobs: parallel file workers
        workers: row-band threads per image
        stack: also write the stacked preview
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="make_shares",
        description="Split image(s) into noise-like shares that reveal the image when stacked.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--shares",
        type=int,
        choices=range(MIN_SHARES, MAX_SHARES + 1),
        default=2,
        help="Number of shares to produce.",
    )
    parser.add_argument(
        "--mono",
        action="store_true",
        help="Encode luminance only (black and grey reveal instead of colour).",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=DEFAULT_MAX_SIZE,
        help="Fit the source into an NxN box before encoding. 0 disables.",
    )
    parser.add_argument(
        "--resample",
        choices=["nearest", "bilinear", "bicubic", "lanczos"],
        default="bilinear",
        help="Scaling filter used when fitting.",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible shares"
    )
    parser.add_argument(
        "--jobs", type=int, default=1, help="Files processed in parallel"
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Row-band threads"
    )
    parser.add_argument(
        "--stack", action="store_true", help="Also write the stacked preview"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def share_paths(src_path: Path, outdir: Optional[Path], count: int) -> List[Path]:
    """Output paths <stem>_share_<k>.png, k = 1..count."""
    base = outdir if outdir is not None else src_path.parent
    return [base / f"{src_path.stem}_share_{k}.png" for k in range(1, count + 1)]


def stacked_path(src_path: Path, outdir: Optional[Path]) -> Path:
    base = outdir if outdir is not None else src_path.parent
    return base / f"{src_path.stem}_stacked.png"


def is_output_artifact(path: Path) -> bool:
    return OUTPUT_STEM_RE.search(path.stem) is not None


# Per-file processing


def _process_single_image(
    src_path: Path, args: argparse.Namespace, out: Optional[TextIO] = None
) -> None:
    """
    Process a single image path end-to-end:
      load -> fit -> encode -> save shares -> optional stack -> report.

    Every log line goes to `out` (None means the current sys.stdout).
    """
    t_start = time.perf_counter()
    print_banner(src_path.name, file=out)

    rgba = load_image_rgba(src_path)
    height0, width0 = rgba.shape[:2]

    if args.debug:
        transparent0 = int(np.count_nonzero(transparent_mask(rgba)))
        debug_log(
            key_value_pairs_to_string(
                [("Loaded", f"{width0}x{height0}"), ("Transparent", transparent0)]
            ),
            file=out,
        )

    limit = args.max_size if args.max_size > 0 else None
    rgba = fit_within(rgba, limit, limit, pillow_resample_from_name(args.resample))
    height, width = rgba.shape[:2]
    if (width, height) != (width0, height0):
        log(f"Fitted {width0}x{height0} -> {width}x{height}", file=out)
    t_fit = time.perf_counter()

    shares = encode_shares(
        rgba,
        args.shares,
        color=not args.mono,
        seed=args.seed,
        workers=args.workers,
        debug=args.debug,
        log_file=out,
    )
    t_encode = time.perf_counter()

    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)
    for k, path in enumerate(share_paths(src_path, args.outdir, args.shares)):
        written = save_rgba_png(path, shares[k])
        log(
            f"Wrote {written.name} | size={shares.shape[2]}x{shares.shape[1]}",
            file=out,
        )

    if args.stack:
        stacked = stack_shares(shares)
        written = save_rgba_png(stacked_path(src_path, args.outdir), stacked)
        log(
            f"Wrote {written.name} | black={format_percentage(ink_coverage(stacked))}",
            file=out,
        )
    t_save = time.perf_counter()

    if args.debug:
        debug_log(
            f"Total {format_duration(t_save - t_start)}  "
            f"(load={format_duration(t_fit - t_start)}, "
            f"encode={format_duration(t_encode - t_fit)}, "
            f"save={format_duration(t_save - t_encode)})",
            file=out,
        )
    else:
        log(f"Total time {format_duration(t_save - t_start)}", file=out)


def _process_one_live(path: Path, args: argparse.Namespace) -> bool:
    """Process a single file and stream logs to stdout. False on failure."""
    try:
        _process_single_image(path, args)
    except (ValueError, OSError) as e:
        error(f"{path.name}: {e}")
        return False
    return True


def _process_one_captured(path: Path, args: argparse.Namespace) -> Tuple[str, bool]:
    """
    Process a single file into a private buffer.

    Used from worker threads so the caller can print each file's block in
    order. sys.stdout is never touched here; errors still go to stderr.
    """
    buf = io.StringIO()
    try:
        _process_single_image(path, args, out=buf)
    except (ValueError, OSError) as e:
        error(f"{path.name}: {e}")
        return buf.getvalue(), False
    return buf.getvalue(), True


def _collect_images(folder: Path) -> Tuple[List[Path], int]:
    """Readable images in folder (by extension, then by decode), outputs excluded."""
    all_entries = list(folder.iterdir())
    candidates = [
        p
        for p in all_entries
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not is_output_artifact(p)
    ]
    files: List[Path] = []
    for p in candidates:
        if is_image_file(p):
            files.append(p)
        else:
            warn(f"skipping unreadable image {p.name}")
    files.sort(key=lambda p: p.name.lower())
    return files, len(all_entries)


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering. Returns the exit status.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    print_config_line(
        "run",
        [
            ("Shares", args.shares),
            ("Colour", not args.mono),
            ("Workers", args.workers),
            ("Jobs", args.jobs),
        ],
        debug=False,
    )
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Max size", args.max_size or "-"),
                    ("Resample", args.resample),
                    ("Seed", args.seed if args.seed is not None else "-"),
                ]
            )
        )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    if not src.is_dir():
        return 0 if _process_one_live(src, args) else 1

    files, n_entries = _collect_images(src)
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [("Folder entries", n_entries), ("Images", len(files))]
            )
        )
    if not files:
        warn(f"no images in {src}")
        return 0

    if args.jobs <= 1:
        results = [_process_one_live(p, args) for p in files]
    else:
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [ex.submit(_process_one_captured, p, args) for p in files]
            outcomes = [f.result() for f in futures]
        print("".join(text for text, _ok in outcomes), end="", flush=True)
        results = [ok for _text, ok in outcomes]
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
