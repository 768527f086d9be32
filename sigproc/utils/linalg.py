"""Small dense linear solver used by the steady-state computations.

Systems here are the size of a filter order (rarely more than 8x8), so a
direct Gaussian elimination with partial pivoting is sufficient.
"""
from __future__ import annotations

import numpy as np

from sigproc.config import DEFAULT_CONFIG
from sigproc.errors import InvalidArgument, NumericFailure


def solve(A, b, pivot_tolerance: float | None = None) -> np.ndarray:
    """Solve ``A @ x = b`` for a square ``A`` by Gaussian elimination.

    Args:
        A: (n, n) coefficient matrix.
        b: Right-hand side of length n.
        pivot_tolerance: Pivots smaller than ``pivot_tolerance * max|A|`` are
            treated as zero. Defaults to ``SignalConfig.pivot_tolerance``.
    Returns:
        Solution vector of length n.
    Raises:
        InvalidArgument: If the shapes do not describe a square system.
        NumericFailure: If the matrix is singular to working precision.
    """
    if pivot_tolerance is None:
        pivot_tolerance = DEFAULT_CONFIG.pivot_tolerance
    m = np.array(A, dtype=float)
    x = np.array(b, dtype=float).reshape(-1)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise InvalidArgument(f"A must be square, got shape {m.shape}")
    n = m.shape[0]
    if x.size != n:
        raise InvalidArgument(f"b must have length {n}, got {x.size}")
    if n == 0:
        return x

    scale = float(np.max(np.abs(m)))
    if not np.isfinite(scale) or scale == 0.0:
        raise NumericFailure("singular matrix in linear solve")
    tol = pivot_tolerance * scale

    # forward elimination
    for k in range(n):
        p = k + int(np.argmax(np.abs(m[k:, k])))
        if abs(m[p, k]) <= tol:
            raise NumericFailure(f"singular matrix in linear solve (pivot {k})")
        if p != k:
            m[[k, p]] = m[[p, k]]
            x[[k, p]] = x[[p, k]]
        for i in range(k + 1, n):
            f = m[i, k] / m[k, k]
            if f != 0.0:
                m[i, k:] -= f * m[k, k:]
                x[i] -= f * x[k]

    # back substitution
    for k in range(n - 1, -1, -1):
        x[k] = (x[k] - np.dot(m[k, k + 1:], x[k + 1:])) / m[k, k]
    return x
