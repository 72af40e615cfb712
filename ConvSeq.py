#!/usr/bin/env python3
"""
Simple image convolution script.
Reference implementation: one output pixel at a time, no parallelism.
"""
import sys
import time

import numpy as np
from PIL import Image

from ConvKernels import as_kernel, generate_box_blur_kernel


def check_rgb(img_arr):
    """Return img_arr as an (H, W, 3) array or raise ValueError."""
    arr = np.asarray(img_arr)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) RGB array, got shape {arr.shape}")
    return arr


def convolve_pixel(img_float, kernel_weights, x, y, half_k):
    """Weighted sum of the clamped neighbourhood of (x, y), one float32 sum per channel."""
    h, w = img_float.shape[0], img_float.shape[1]
    k = kernel_weights.shape[0]
    acc = np.zeros(3, dtype=np.float32)

    for ky in range(k):
        # Signed offset first, then clamp into the image (edge replication)
        ny = min(max(y + ky - half_k, 0), h - 1)
        for kx in range(k):
            nx = min(max(x + kx - half_k, 0), w - 1)
            acc += img_float[ny, nx] * kernel_weights[ky, kx]

    return acc


def to_uint8(acc):
    # float64 add is exact for any float32 sum, so floor(v + 0.5) rounds half away from zero
    return np.clip(np.floor(acc.astype(np.float64) + 0.5), 0, 255).astype(np.uint8)


def apply_convolution(img_arr, kernel):
    img_arr = check_rgb(img_arr)
    kernel = as_kernel(kernel)

    h, w = img_arr.shape[0], img_arr.shape[1]
    out = np.zeros((h, w, 3), dtype=np.uint8)
    if h == 0 or w == 0:
        return out

    img_float = img_arr.astype(np.float32)
    weights = kernel.weights
    half_k = kernel.half

    # Classic double loop over each output pixel
    for y in range(h):
        for x in range(w):
            out[y, x] = to_uint8(convolve_pixel(img_float, weights, x, y, half_k))

    return out


def apply_convolution_timed(img_arr, kernel):
    """Run apply_convolution() and return (result, elapsed_seconds) measured inside this module."""
    t0 = time.perf_counter()
    out = apply_convolution(img_arr, kernel)
    t1 = time.perf_counter()
    return out, (t1 - t0)


if __name__ == "__main__":
    # Configuration
    input_path = sys.argv[1] if len(sys.argv) > 1 else "images/place.jpg"
    output_path = sys.argv[2] if len(sys.argv) > 2 else "output_sequential.jpg"
    kernel = generate_box_blur_kernel(5)

    # Load RGB image
    img = Image.open(input_path).convert("RGB")
    arr = np.array(img)

    print(f"Processing image: {arr.shape[0]}x{arr.shape[1]} pixels")
    result, elapsed = apply_convolution_timed(arr, kernel)
    print(f"Sequential convolution took {elapsed:.4f} seconds")

    # Save result
    Image.fromarray(result).save(output_path)
    print(f"Saved: {output_path}")
