"""Small signal utilities used across the package."""
from __future__ import annotations
import numpy as np


def dc_offset(x: np.ndarray) -> float:
    """Compute mean (DC) of a signal."""
    return float(np.mean(x))


def detrend_mean(x: np.ndarray) -> np.ndarray:
    """Subtract mean from a signal."""
    x = np.asarray(x, dtype=float)
    return x - np.mean(x)


def detrend(y) -> np.ndarray:
    """Remove a least-squares linear trend from a signal.

    The line ``y = a + b*i`` is fitted against the sample index ``i`` and
    subtracted. Signals of length 0 or 1 have no trend to remove.
    """
    y = np.asarray(y, dtype=float)
    n = y.size
    if n < 2:
        return y - y
    i = np.arange(n, dtype=float)
    sx = i.sum()
    sy = y.sum()
    sxx = np.dot(i, i)
    sxy = np.dot(i, y)
    delta = n * sxx - sx * sx
    a = (sxx * sy - sx * sxy) / delta
    b = (n * sxy - sx * sy) / delta
    return y - (a + b * i)
