#!/usr/bin/env python3
"""
Parallel image convolution script using joblib.
Rows are split into contiguous blocks; each block is convolved by a worker
thread and written straight into its own slice of a pre-allocated output.
"""
import sys
import time

import numpy as np
from PIL import Image
from joblib import Parallel, delayed, effective_n_jobs

from ConvKernels import as_kernel, force_odd, generate_box_blur_kernel
from ConvSeq import check_rgb, to_uint8


def clamped_offsets(positions, k, half_k, limit):
    """(k, len(positions)) table of source indices for each kernel offset, clamped to [0, limit-1]."""
    offsets = np.arange(k, dtype=np.int64) - half_k
    return np.clip(positions[np.newaxis, :] + offsets[:, np.newaxis], 0, limit - 1)


def process_rows(img_float, out, weights, col_index, start_i, end_i):
    """Convolve output rows [start_i, end_i) for all channels at once."""
    h = img_float.shape[0]
    k = weights.shape[0]
    row_index = clamped_offsets(np.arange(start_i, end_i, dtype=np.int64), k, k // 2, h)

    acc = np.zeros((end_i - start_i, img_float.shape[1], 3), dtype=np.float32)
    for ky in range(k):
        rows = img_float[row_index[ky]]
        for kx in range(k):
            acc += rows[:, col_index[kx]] * weights[ky, kx]

    out[start_i:end_i] = to_uint8(acc)
    return start_i, end_i


def make_blocks(h, n_jobs, block_size=None):
    """Split [0, h) into contiguous (start, end) row blocks."""
    if block_size is None:
        # Aim for ~4 blocks per worker for better load balancing
        total_blocks = effective_n_jobs(n_jobs) * 4
        block_size = max(1, -(-h // total_blocks))
    if block_size < 1:
        raise ValueError(f"block_size must be >= 1, got {block_size}")

    return [(i, min(i + block_size, h)) for i in range(0, h, block_size)]


def apply_convolution(img_arr, kernel, n_jobs=-1, block_size=None):
    img_arr = check_rgb(img_arr)
    kernel = as_kernel(kernel)

    h, w = img_arr.shape[0], img_arr.shape[1]
    out = np.zeros((h, w, 3), dtype=np.uint8)
    if h == 0 or w == 0:
        return out

    # Convert to float32 once; shared read-only by every worker
    img_float = np.ascontiguousarray(img_arr, dtype=np.float32)
    weights = kernel.weights
    col_index = clamped_offsets(np.arange(w, dtype=np.int64), kernel.size, kernel.half, w)

    blocks = make_blocks(h, n_jobs, block_size)

    # Threads share `out`; every block writes a disjoint range of rows
    Parallel(n_jobs=n_jobs, require="sharedmem")(
        delayed(process_rows)(img_float, out, weights, col_index, start_i, end_i)
        for start_i, end_i in blocks
    )

    return out


def apply_convolution_timed(img_arr, kernel, n_jobs=-1, block_size=None):
    """Run apply_convolution() and return (result, elapsed_seconds) measured inside this module."""
    t0 = time.perf_counter()
    out = apply_convolution(img_arr, kernel, n_jobs=n_jobs, block_size=block_size)
    t1 = time.perf_counter()
    return out, (t1 - t0)


if __name__ == "__main__":
    # Configuration
    input_path = sys.argv[1] if len(sys.argv) > 1 else "images/place.jpg"
    output_path = sys.argv[2] if len(sys.argv) > 2 else "output_parallel.jpg"
    blur_size = force_odd(int(sys.argv[3])) if len(sys.argv) > 3 else 5
    n_jobs = -1  # -1 uses all available cores

    # Load RGB image
    img = Image.open(input_path).convert("RGB")
    arr = np.array(img)

    print(f"Processing image: {arr.shape[0]}x{arr.shape[1]} pixels")
    print(f"Parallelization: row blocks across {effective_n_jobs(n_jobs)} threads")

    result, elapsed = apply_convolution_timed(arr, generate_box_blur_kernel(blur_size), n_jobs=n_jobs)
    print(f"Parallel convolution took {elapsed:.4f} seconds")

    # Save result
    Image.fromarray(result).save(output_path)
    print(f"Saved: {output_path}")
