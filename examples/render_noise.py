#!/usr/bin/env python3
"""Render a white-noise image with a pixel sampler.

This script plays the host renderer: it builds a sampler from configuration,
sets the base seed, clones the sampler once per worker thread, and for every
pixel and sample calls start_pixel() followed by a fixed sequence of draws.
Each pixel stores the per-channel mean of its draws, so the output converges
to flat grey as the sample count grows, and two runs with the same seed are
bit-identical regardless of the number of workers.

Usage:
    python examples/render_noise.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 128)
    --height HEIGHT     Image height in pixels (default: 128)
    --samples SAMPLES   Samples per pixel, overrides the config (default: 4)
    --config CONFIG     JSON file with a sampler block, e.g.
                        {"type": "independent", "samples": 16}
    --seed SEED         Base seed (default: 0)
    --workers WORKERS   Number of worker threads (default: 4)
    --output OUTPUT     Output file path (default: noise.png)
    --quiet             Suppress progress output

Example:
    python examples/render_noise.py --width 64 --height 64 --samples 16
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import numpy as np


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a white-noise image with a pixel sampler.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=128,
        help="Image width in pixels (default: 128)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=128,
        help="Image height in pixels (default: 128)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Samples per pixel, overrides the config (default: 4)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file holding the sampler configuration block",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Base seed (default: 0)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Number of worker threads (default: 4)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="noise.png",
        help="Output file path (default: noise.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def load_sampler_config(path: str | None, samples: int | None) -> dict:
    """Load the sampler block from a JSON file and apply overrides."""
    config: dict = {"type": "independent", "samples": 4}
    if path is not None:
        with open(path, encoding="utf-8") as f:
            config.update(json.load(f))
    if samples is not None:
        config["samples"] = samples
    return config


def render_rows(sampler, rows: range, width: int) -> np.ndarray:
    """Render a band of rows with one worker's sampler.

    Every sample draws one scalar (red) and one pair (green, blue), the way
    an integrator would draw a lens sample after a wavelength sample.
    """
    band = np.zeros((len(rows), width, 3), dtype=np.float32)
    spp = sampler.samples_per_pixel
    for local_y, y in enumerate(rows):
        for x in range(width):
            total = np.zeros(3, dtype=np.float64)
            for index in range(spp):
                sampler.start_pixel((x, y), index)
                r = sampler.next1f()
                g, b = sampler.next2f()
                total += (r, g, b)
            band[local_y, x] = total / spp
    return band


def render_noise(
    sampler,
    width: int,
    height: int,
    workers: int = 4,
) -> np.ndarray:
    """Render the noise image in parallel.

    The sampler is cloned once per row band before any pixel is rendered, so
    workers never share generator state.

    Returns:
        Float32 array of shape (height, width, 3) with values in [0, 1).
    """
    workers = max(1, min(workers, height))
    bands = [range(start, height, workers) for start in range(workers)]
    clones = [sampler.clone() for _ in bands]

    image = np.zeros((height, width, 3), dtype=np.float32)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = pool.map(render_rows, clones, bands, [width] * len(bands))
        for rows, band in zip(bands, results):
            image[list(rows)] = band
    return image


def save_png(image: np.ndarray, filepath: str) -> None:
    """Save a [0, 1] float image as an 8-bit PNG."""
    from PIL import Image as PILImage

    image_8bit = (np.clip(image, 0.0, 1.0) * 255).astype(np.uint8)
    PILImage.fromarray(image_8bit).save(filepath)


def main() -> int:
    """Main entry point."""
    from pixelsampler.samplers import sampler_from_config

    args = parse_args()

    try:
        config = load_sampler_config(args.config, args.samples)
        sampler = sampler_from_config(config)
        sampler.set_base_seed(args.seed)
    except (OSError, ValueError) as e:
        # ConfigError and json.JSONDecodeError are both ValueErrors
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(
            f"Rendering {args.width}x{args.height} at {sampler.samples_per_pixel} spp "
            f"with {args.workers} workers..."
        )

    start_time = time.time()
    image = render_noise(sampler, args.width, args.height, workers=args.workers)

    output_file = Path(args.output)
    save_png(image, str(output_file))

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Mean value: {image.mean():.4f}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return 0


if __name__ == "__main__":
    sys.exit(main())
