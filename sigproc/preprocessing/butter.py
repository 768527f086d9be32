r"""Butterworth low-pass design as a cascade of second-order sections.

An Nth order analog Butterworth low-pass prototype has squared magnitude

.. math:: |H(j\Omega)|^2 = \frac{1}{1 + (\Omega/\Omega_c)^{2N}}

For even ``N`` its poles pair up into ``N/2`` conjugate pairs, each giving a
quadratic factor. After the bilinear transform with pre-warped cutoff
``wc = tan(pi * wn / 2)`` the k-th factor becomes

.. math:: H_k(z) = \frac{w_c^2 (1 + 2 z^{-1} + z^{-2})}
                        {(1 + c_k + w_c^2) + 2 (w_c^2 - 1) z^{-1} + (1 - c_k + w_c^2) z^{-2}}

with ``c_k = 2 cos(pi (2k + 1) / (2N)) wc``. See
http://www.kwon3d.com/theory/filtering/sys.html for the derivation.
"""
from __future__ import annotations

import math
from typing import List

from sigproc.errors import InvalidArgument
from sigproc.logging import get_logger
from .sos import SOSSection

logger = get_logger(__name__)


def butter_sos_even(order: int, norm_cutoff: float) -> List[SOSSection]:
    """Design an even-order Butterworth low-pass as second-order sections.

    Args:
        order: Filter order; must be even and positive.
        norm_cutoff: Cutoff as a fraction of Nyquist, in ``[0, 1]``.
    Returns:
        ``order // 2`` sections, in the order they should be applied.
    """
    if order <= 0 or order % 2 != 0:
        raise InvalidArgument(f"order must be even and positive, got {order}")
    if not 0.0 <= norm_cutoff <= 1.0:
        raise InvalidArgument(f"norm_cutoff must be in [0, 1], got {norm_cutoff}")

    omegac = math.tan(math.pi * norm_cutoff / 2.0)
    b0 = omegac * omegac
    b1 = 2.0 * b0

    sections = []
    for k in range(order // 2):
        cf = 2.0 * math.cos(math.pi * (2 * k + 1) / (2 * order)) * omegac
        a0 = 1.0 + cf + b0
        a1 = 2.0 * (b0 - 1.0)
        a2 = 1.0 - cf + b0
        sections.append(SOSSection.from_coefficients(b0, b1, b0, a0, a1, a2))
    logger.debug("butter_sos_even: order=%d wn=%g -> %d sections", order, norm_cutoff, len(sections))
    return sections


def design_lowpass_sos(fs: float, cutoff: float, order: int = 4) -> List[SOSSection]:
    """Design a Butterworth low-pass from a cutoff in Hz.

    Args:
        fs: Sampling rate (Hz).
        cutoff: Cutoff frequency (Hz), at most Nyquist.
        order: Even filter order.
    Returns:
        Sections suitable for ``sosfilt``, ``sosfiltfilt`` or ``StreamingSOS``.
    """
    if fs <= 0:
        raise InvalidArgument(f"fs must be positive, got {fs}")
    nyq = 0.5 * float(fs)
    if not 0.0 <= cutoff <= nyq:
        raise InvalidArgument(f"cutoff must be in [0, {nyq}] Hz, got {cutoff}")
    return butter_sos_even(order, float(cutoff) / nyq)
