#!/usr/bin/env python3
"""
Kernel presets for image convolution.
A Kernel always has an odd side so that its center cell is well defined.
"""
import numpy as np


class KernelError(ValueError):
    """Raised when a weight matrix cannot be used as a convolution kernel."""


class Kernel:
    """Square, odd-sized matrix of float32 weights."""

    def __init__(self, weights):
        arr = np.array(weights, dtype=np.float32)

        if arr.ndim != 2:
            raise KernelError(f"Kernel must be 2-D, got {arr.ndim} dimension(s)")
        kh, kw = arr.shape
        if kh != kw:
            raise KernelError(f"Kernel must be square, got {kh}x{kw}")
        if kh == 0:
            raise KernelError("Kernel must not be empty")
        if kh % 2 == 0:
            raise KernelError(f"Kernel size must be odd, got {kh}")
        if not np.all(np.isfinite(arr)):
            raise KernelError("Kernel weights must be finite")

        arr.setflags(write=False)
        self._weights = arr

    @property
    def weights(self):
        return self._weights

    @property
    def size(self):
        return self._weights.shape[0]

    @property
    def half(self):
        # Index of the center cell
        return self.size // 2

    def sum(self):
        return float(self._weights.sum(dtype=np.float64))

    def __repr__(self):
        return f"Kernel(size={self.size}, sum={self.sum():.4f})"

    def __eq__(self, other):
        if not isinstance(other, Kernel):
            return NotImplemented
        return np.array_equal(self._weights, other._weights)

    __hash__ = None


def force_odd(size):
    """Round an even kernel size up to the next odd number."""
    return size + 1 if size % 2 == 0 else size


def generate_box_blur_kernel(size):
    """Uniform size x size kernel, every cell 1/size^2, so brightness is preserved."""
    if size < 1:
        raise KernelError(f"Box blur size must be >= 1, got {size}")
    value = 1.0 / (size * size)
    return Kernel(np.full((size, size), value, dtype=np.float32))


def generate_sharpen_kernel():
    """3x3 kernel: center weighted 5, direct neighbours -1. Weights sum to 1."""
    return Kernel([[0, -1, 0],
                   [-1, 5, -1],
                   [0, -1, 0]])


def as_kernel(kernel):
    """Return kernel unchanged if it is already a Kernel, otherwise wrap (and validate) it."""
    if isinstance(kernel, Kernel):
        return kernel
    return Kernel(kernel)
