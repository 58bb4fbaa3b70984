"""Benchmark spline fitting and evaluation.

Times ``interpolate`` and ``sample`` on synthetic strokes of increasing
length, with the knot interval fixed, to show how the normal equations and
the recursive basis evaluation scale with the number of samples.
"""

import math
import time

from sketchspline.geometry import Point
from sketchspline.spline import interpolate, sample


def make_stroke(n_points: int) -> list:
    """Spiral stroke sampled at uniform times over [0, 1]."""
    points = []
    for i in range(n_points):
        t = i / (n_points - 1)
        radius = 1.0 + 4.0 * t
        points.append(
            Point.create(radius * math.cos(6.0 * t), radius * math.sin(6.0 * t), t)
        )
    return points


def benchmark_interpolate(
    n_points: int,
    degree: int = 3,
    knot_interval: float = 0.1,
    n_iterations: int = 10,
) -> float:
    """Benchmark fitting a stroke.

    Parameters
    ----------
    n_points : int
        Number of samples in the stroke.
    degree : int
        Spline degree.
    knot_interval : float
        Knot spacing passed to ``interpolate``.
    n_iterations : int
        Number of iterations for timing.

    Returns
    -------
    float
        Average time per fit in milliseconds.
    """
    points = make_stroke(n_points)

    # Warmup
    for _ in range(2):
        _ = interpolate(points, degree, knot_interval)

    start = time.perf_counter()
    for _ in range(n_iterations):
        _ = interpolate(points, degree, knot_interval)

    elapsed = time.perf_counter() - start
    return elapsed / n_iterations * 1000  # ms


def benchmark_sample(n_points: int, step: float = 0.01, n_iterations: int = 10) -> float:
    """Average time in milliseconds to sample a fitted stroke."""
    curve = interpolate(make_stroke(n_points))

    start = time.perf_counter()
    for _ in range(n_iterations):
        _ = sample(curve, step)

    elapsed = time.perf_counter() - start
    return elapsed / n_iterations * 1000  # ms


def main():
    """Run fitting benchmarks across stroke lengths."""
    lengths = [32, 64, 128, 256, 512, 1024]

    print("=" * 60)
    print("Spline Fitting Benchmark")
    print("=" * 60)
    print(f"{'Points':>8} {'Fit (ms)':>14} {'Sample (ms)':>14}")
    print("-" * 60)

    for n_points in lengths:
        ms_fit = benchmark_interpolate(n_points)
        ms_sample = benchmark_sample(n_points)

        print(f"{n_points:>8} {ms_fit:>14.4f} {ms_sample:>14.4f}")

    print()
    print("Notes:")
    print("- Cubic spline, knot interval 0.1 (13 control points)")
    print("- Sampling evaluates 100 points by de Boor's algorithm")


if __name__ == "__main__":
    main()
