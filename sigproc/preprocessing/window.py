r"""Window functions.

Tukey (tapered cosine) window with taper fraction ``a``:

.. math::

    w(x) = \begin{cases}
        \tfrac12 (1 + \cos(\tfrac{2\pi}{a}(x - \tfrac a2)))     & 0 \le x < a/2 \\
        1                                                        & a/2 \le x < 1 - a/2 \\
        \tfrac12 (1 + \cos(\tfrac{2\pi}{a}(x - 1 + \tfrac a2))) & 1 - a/2 \le x \le 1
    \end{cases}

where ``x = i / (n - 1)``. ``a <= 0`` is a rectangular window and ``a >= 1``
a Hann window.
"""
from __future__ import annotations

import numpy as np

from sigproc.errors import InvalidArgument


def rectwin(n: int) -> np.ndarray:
    """Rectangular window (all ones)."""
    if n <= 0:
        raise InvalidArgument(f"window length must be positive, got {n}")
    return np.ones(int(n))


def tukeywin(n: int, a: float = 0.5) -> np.ndarray:
    """Tukey window of ``n`` samples with taper fraction ``a`` (clamped to [0, 1])."""
    if n <= 0:
        raise InvalidArgument(f"window length must be positive, got {n}")
    if n == 1:
        return np.ones(1)
    aa = min(max(float(a), 0.0), 1.0)
    if aa == 0.0:
        return np.ones(int(n))
    x = np.arange(n, dtype=float) / (n - 1)
    w = np.ones(int(n))
    left = x < aa / 2
    right = x >= 1 - aa / 2
    w[left] = 0.5 * (1 + np.cos(2 * np.pi / aa * (x[left] - aa / 2)))
    w[right] = 0.5 * (1 + np.cos(2 * np.pi / aa * (x[right] - 1 + aa / 2)))
    return w


def hann(n: int, periodic: bool = False) -> np.ndarray:
    """Hann (raised cosine) window.

    With ``periodic=True`` a window of ``n + 1`` samples is computed and the
    last one dropped, which suits spectral analysis.
    """
    if n <= 0:
        raise InvalidArgument(f"window length must be positive, got {n}")
    if periodic:
        return tukeywin(n + 1, 1.0)[:n]
    return tukeywin(n, 1.0)
