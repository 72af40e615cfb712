"""
Tests for the benchmark and plotting scripts.
"""
import json

import matplotlib
matplotlib.use("Agg")

import benchmark
import visualize_benchmark
from ConvKernels import generate_box_blur_kernel


def run_small_benchmark():
    img = benchmark.random_image(12, seed=3)
    return benchmark.benchmark_convolution(img, generate_box_blur_kernel(3), n_jobs_list=[1, 2], n_runs=1)


def test_benchmark_results(capsys):
    data = run_small_benchmark()

    assert data['metadata']['kernel_size'] == 3
    assert data['metadata']['image_height'] == 12
    assert [r['implementation'] for r in data['results']] == ['ConvSeq', 'ConvParallel', 'ConvParallel']
    assert [r['n_jobs'] for r in data['results']] == [1, 1, 2]
    assert all(r['identical'] for r in data['results'])
    assert all(len(r['times']) == 1 for r in data['results'])
    assert "All results are identical" in capsys.readouterr().out


def test_save_and_load_results(tmp_path):
    data = run_small_benchmark()
    path = tmp_path / "results.json"
    benchmark.save_results(data, path)

    assert json.loads(path.read_text()) == visualize_benchmark.load_results(path)
    assert visualize_benchmark.load_results(path)['metadata']['n_runs'] == 1


def test_plot_written(tmp_path):
    data = run_small_benchmark()
    out = tmp_path / "plot.png"
    visualize_benchmark.plot_speedup(data, out)
    assert out.exists() and out.stat().st_size > 0


def test_random_image_is_reproducible():
    a = benchmark.random_image(8, seed=1)
    b = benchmark.random_image(8, seed=1)
    assert a.shape == (8, 8, 3)
    assert (a == b).all()
