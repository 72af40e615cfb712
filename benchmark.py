#!/usr/bin/env python3
"""
Benchmark script to compare the sequential and parallel convolution versions.

Usage: python3 benchmark.py [image_path] [blur_size] [n_runs]
Without an image path a random RGB image is generated.
"""
import json
import multiprocessing
import sys

import numpy as np
from PIL import Image

import ConvParallel
import ConvSeq
from ConvKernels import as_kernel, force_odd, generate_box_blur_kernel

N_JOBS_LIST = [1, 2, 4, -1]
SYNTHETIC_SIZE = 128


def random_image(size, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(size, size, 3), dtype=np.uint8)


def summarize(times):
    return float(np.mean(times)), float(np.std(times))


def benchmark_convolution(img_arr, kernel, n_jobs_list=N_JOBS_LIST, n_runs=3):
    """Time ConvSeq once per run and ConvParallel for every n_jobs, and verify the outputs match."""
    kernel = as_kernel(kernel)

    print(f"Image size: {img_arr.shape[0]}x{img_arr.shape[1]} pixels")
    print(f"Kernel size: {kernel.size}x{kernel.size}")
    print(f"Number of runs: {n_runs}")
    print(f"CPU cores: {multiprocessing.cpu_count()}")
    print("=" * 70)

    results = []

    print("\nSEQUENTIAL VERSION")
    print("-" * 70)
    times_seq = []
    for i in range(n_runs):
        result_seq, elapsed = ConvSeq.apply_convolution_timed(img_arr, kernel)
        times_seq.append(elapsed)
        print(f"Run {i+1}: {elapsed:.4f} seconds")

    avg_seq, std_seq = summarize(times_seq)
    print(f"Average: {avg_seq:.4f} ± {std_seq:.4f} seconds")
    results.append({
        'implementation': 'ConvSeq',
        'n_jobs': 1,
        'times': times_seq,
        'mean_seconds': avg_seq,
        'std_seconds': std_seq,
        'speedup': 1.0,
        'identical': True,
    })

    for n_jobs in n_jobs_list:
        print(f"\nPARALLEL VERSION (n_jobs={n_jobs})")
        print("-" * 70)
        times_par = []
        for i in range(n_runs):
            result_par, elapsed = ConvParallel.apply_convolution_timed(img_arr, kernel, n_jobs=n_jobs)
            times_par.append(elapsed)
            print(f"Run {i+1}: {elapsed:.4f} seconds")

        avg_par, std_par = summarize(times_par)
        speedup = avg_seq / avg_par if avg_par > 0 else float('inf')
        identical = bool(np.array_equal(result_seq, result_par))
        print(f"Average: {avg_par:.4f} ± {std_par:.4f} seconds")
        print(f"Speedup: {speedup:.2f}x")
        results.append({
            'implementation': 'ConvParallel',
            'n_jobs': n_jobs,
            'times': times_par,
            'mean_seconds': avg_par,
            'std_seconds': std_par,
            'speedup': speedup,
            'identical': identical,
        })

    # Summary
    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)
    for r in results:
        label = f"{r['implementation']} (n_jobs={r['n_jobs']})"
        print(f"{label:<30} {r['mean_seconds']:.4f}s  ({r['speedup']:.2f}x)")

    best = min(results, key=lambda r: r['mean_seconds'])
    print(f"\n🏆 Best: {best['implementation']} n_jobs={best['n_jobs']} ({best['mean_seconds']:.4f}s)")

    print("\n" + "=" * 70)
    print("VERIFICATION")
    print("=" * 70)
    if all(r['identical'] for r in results):
        print("✓ All results are identical!")
    else:
        for r in results:
            if not r['identical']:
                print(f"⚠ n_jobs={r['n_jobs']} differs from the sequential result")

    return {
        'metadata': {
            'image_height': int(img_arr.shape[0]),
            'image_width': int(img_arr.shape[1]),
            'kernel_size': kernel.size,
            'n_runs': n_runs,
            'cpu_count': multiprocessing.cpu_count(),
        },
        'results': results,
    }


def save_results(data, json_path='benchmark_results.json'):
    with open(json_path, 'w') as f:
        json.dump(data, f, indent=2)
    print(f"\n✓ Results saved to: {json_path}")


def main():
    # Configuration
    input_path = sys.argv[1] if len(sys.argv) > 1 else None
    blur_size = force_odd(int(sys.argv[2])) if len(sys.argv) > 2 else 5
    n_runs = int(sys.argv[3]) if len(sys.argv) > 3 else 3

    if input_path:
        try:
            img_arr = np.array(Image.open(input_path).convert("RGB"))
        except OSError as e:
            print(f"Error: cannot read {input_path}: {e}")
            return 1
    else:
        img_arr = random_image(SYNTHETIC_SIZE)

    print("=" * 70)
    print("CONVOLUTION BENCHMARK: Sequential vs Parallel")
    print("=" * 70)

    data = benchmark_convolution(img_arr, generate_box_blur_kernel(blur_size), N_JOBS_LIST, n_runs)
    save_results(data)
    return 0


if __name__ == "__main__":
    sys.exit(main())
