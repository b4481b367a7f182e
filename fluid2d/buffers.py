"""
buffers.py — Current/Previous Field Pairs
==========================================
Every transported quantity needs two arrays: the values from the previous
stage (the source of a diffusion solve, the departure field of advection)
and the values being written now. Instead of juggling "u" and "u_prev" by
hand, each field owns a DoubleBuffer and the pipeline swaps roles explicitly.

swap() only exchanges references — no array is ever reallocated.
"""

import numpy as np


class DoubleBuffer:
    """Two same-shaped arrays with named roles: `current` and `previous`."""

    def __init__(self, shape: tuple, dtype=np.float32):
        self.current  = np.zeros(shape, dtype=dtype)
        self.previous = np.zeros(shape, dtype=dtype)

    def swap(self):
        """The array just written becomes `previous`; the other is reused as `current`."""
        self.current, self.previous = self.previous, self.current

    def fill(self, value: float = 0.0):
        self.current.fill(value)
        self.previous.fill(value)

    def __repr__(self):
        return f"DoubleBuffer(shape={self.current.shape}, dtype={self.current.dtype})"
