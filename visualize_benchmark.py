#!/usr/bin/env python3
"""
Visualize benchmark results from benchmark_results.json
Creates bar charts of execution time and speedup per worker count.
"""

import json
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np


def load_results(json_path='benchmark_results.json'):
    """Load benchmark results from JSON file."""
    with open(json_path, 'r') as f:
        data = json.load(f)
    return data


def _label(entry):
    if entry['implementation'] == 'ConvSeq':
        return 'Sequential'
    n_jobs = entry['n_jobs']
    return 'all cores' if n_jobs == -1 else f'{n_jobs} jobs'


def plot_speedup(data, output_path='benchmark_plot.png', show=False):
    """Two panels: mean time (with std error bars) and speedup vs the sequential run."""
    entries = data['results']
    meta = data.get('metadata', {})

    labels = [_label(e) for e in entries]
    means = np.array([e['mean_seconds'] * 1000 for e in entries])
    stds = np.array([e['std_seconds'] * 1000 for e in entries])
    speedups = np.array([e['speedup'] for e in entries])
    x = np.arange(len(entries))

    fig, (ax_time, ax_speed) = plt.subplots(1, 2, figsize=(14, 6))
    fig.suptitle(
        f"Convolution Benchmark - {meta.get('image_height', '?')}x{meta.get('image_width', '?')} image, "
        f"{meta.get('kernel_size', '?')}x{meta.get('kernel_size', '?')} kernel",
        fontsize=14, fontweight='bold'
    )

    colors = ['#87CEEB' if e['implementation'] == 'ConvSeq' else '#A23B72' for e in entries]

    bars = ax_time.bar(x, means, yerr=stds, color=colors, alpha=0.8, capsize=4)
    for bar in bars:
        height = bar.get_height()
        ax_time.text(bar.get_x() + bar.get_width()/2., height,
                     f'{height:.1f}', ha='center', va='bottom', fontsize=8)
    ax_time.set_ylabel('Time (ms)', fontsize=11, fontweight='bold')
    ax_time.set_title('Execution Time', fontsize=12, fontweight='bold')
    ax_time.set_xticks(x)
    ax_time.set_xticklabels(labels)
    ax_time.set_yscale('log')
    ax_time.grid(True, alpha=0.3, axis='y')

    bars = ax_speed.bar(x, speedups, color=colors, alpha=0.8)
    for bar, entry in zip(bars, entries):
        mark = '' if entry.get('identical', True) else ' ⚠'
        ax_speed.text(bar.get_x() + bar.get_width()/2., bar.get_height(),
                      f'{bar.get_height():.1f}x{mark}', ha='center', va='bottom', fontsize=8)
    ax_speed.axhline(y=1.0, color='red', linestyle='--', linewidth=1, alpha=0.7, label='Sequential')
    ax_speed.set_ylabel('Speedup vs Sequential', fontsize=11, fontweight='bold')
    ax_speed.set_title('Speedup', fontsize=12, fontweight='bold')
    ax_speed.set_xticks(x)
    ax_speed.set_xticklabels(labels)
    ax_speed.legend(fontsize=8, loc='best')
    ax_speed.grid(True, alpha=0.3, axis='y')

    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"✓ Benchmark plot saved to: {output_path}")
    if show:
        plt.show()
    plt.close(fig)
    return output_path


def main():
    json_path = Path(sys.argv[1] if len(sys.argv) > 1 else 'benchmark_results.json')
    if not json_path.exists():
        print(f"Error: {json_path} not found!")
        print("Run 'python3 benchmark.py' first to generate results.")
        return 1

    data = load_results(json_path)
    plot_speedup(data, show=True)
    return 0


if __name__ == '__main__':
    sys.exit(main())
