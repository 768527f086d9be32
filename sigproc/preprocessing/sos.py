r"""Second-order sections (biquads) and cascades of them.

A single section implements

.. math:: H(z) = \frac{b_0 + b_1 z^{-1} + b_2 z^{-2}}{1 + a_1 z^{-1} + a_2 z^{-2}}

with the same Direct Form II Transposed recursion as
:mod:`sigproc.preprocessing.filters`, specialized to two state registers:

.. math::

    y[m] &= b_0 x[m] + z_0 \\
    z_0  &= b_1 x[m] + z_1 - a_1 y[m] \\
    z_1  &= b_2 x[m] - a_2 y[m]

Higher order filters are expressed as a cascade of sections applied left to
right. Mathematically the order of the sections does not matter; in floating
point it does, so the given order is always kept.

A cascade can be passed either as a list of :class:`SOSSection` or as a table
with one row ``[b0 b1 b2 a0 a1 a2]`` per section.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Union

import numpy as np

from sigproc.errors import InvalidArgument
from sigproc.logging import get_logger
from .filtfilt import filtfilt, lfilter_zi

logger = get_logger(__name__)


@dataclass(frozen=True)
class SOSSection:
    """One biquad with ``a0`` normalized to 1.

    Attributes:
        b0, b1, b2: Numerator coefficients.
        a1, a2: Denominator coefficients (``a0 == 1`` implied).
    """

    b0: float
    b1: float
    b2: float
    a1: float
    a2: float

    @classmethod
    def from_coefficients(cls, b0, b1, b2, a0, a1, a2) -> "SOSSection":
        """Build a section from six coefficients, dividing all by ``a0``."""
        if a0 == 0:
            raise InvalidArgument("a0 must be non-zero")
        return cls(b0 / a0, b1 / a0, b2 / a0, a1 / a0, a2 / a0)

    @property
    def b(self) -> tuple:
        return (self.b0, self.b1, self.b2)

    @property
    def a(self) -> tuple:
        return (1, self.a1, self.a2)

    def apply(self, x: Iterable, zi: Optional[Sequence] = None) -> Iterator:
        """Lazily filter ``x`` through this section.

        Args:
            x: Input samples (any iterable, possibly unbounded).
            zi: Optional initial state ``(z0, z1)``.
        Returns:
            Iterator yielding one output per input sample.
        """
        if zi is None:
            z = [0, 0]
        else:
            z = list(zi)
            if len(z) != 2:
                raise InvalidArgument(f"zi for a second-order section must have length 2, got {len(z)}")
        return _biquad(self, iter(x), z)

    __call__ = apply


def _biquad(s: SOSSection, xs: Iterator, z: List) -> Iterator:
    # z is updated in place so block-wise callers can carry it forward
    b0, b1, b2, a1, a2 = s.b0, s.b1, s.b2, s.a1, s.a2
    z0, z1 = z
    for xm in xs:
        ym = b0 * xm + z0
        z0 = b1 * xm + z1 - a1 * ym
        z1 = b2 * xm - a2 * ym
        z[0], z[1] = z0, z1
        yield ym


Cascade = Union[SOSSection, Sequence[SOSSection], Sequence[Sequence[float]], np.ndarray]


def as_sections(cascade: Cascade) -> List[SOSSection]:
    """Convert a cascade (sections or a 6-column table) into a list of sections.

    A list of sections is returned as a new list, never the caller's own.

    Raises:
        InvalidArgument: If a table is not 2-D with exactly 6 columns and at
            least one row, or mixes sections with coefficient rows.
    """
    if isinstance(cascade, SOSSection):
        return [cascade]
    if not isinstance(cascade, np.ndarray):
        cascade = list(cascade)
        if cascade and all(isinstance(s, SOSSection) for s in cascade):
            return cascade
    try:
        table = np.asarray(cascade, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"SOS cascade must be sections or numeric rows of 6 coefficients: {exc}") from exc
    if table.ndim != 2 or table.shape[1] != 6:
        raise InvalidArgument(f"SOS table must have shape (n_sections, 6), got {table.shape}")
    if table.shape[0] < 1:
        raise InvalidArgument("SOS table must have at least one row")
    return [SOSSection.from_coefficients(*row) for row in table.tolist()]


def sosfilt(cascade: Cascade, x: Iterable) -> Iterator:
    """Apply a cascade of second-order sections to ``x``, lazily.

    Each section consumes the complete output stream of the previous one, in
    the order given. The cascade is validated before any sample is read.
    """
    y: Iterator = iter(x)
    for s in as_sections(cascade):
        y = s.apply(y)
    return y


def sosfilt_zi(cascade: Cascade) -> np.ndarray:
    """Steady-state initial conditions of a cascade for a unit step input.

    Returns an ``(n_sections, 2)`` array. Section ``k`` is seeded with the
    DC gain of sections ``0..k-1`` so the whole cascade starts at rest on a
    constant input of 1.
    """
    sections = as_sections(cascade)
    zi = np.empty((len(sections), 2))
    scale = 1.0
    for k, s in enumerate(sections):
        zi[k] = scale * lfilter_zi(s.b, s.a)
        scale *= sum(s.b) / sum(s.a)
    return zi


def sosfiltfilt(cascade: Cascade, x) -> np.ndarray:
    """Zero-phase filtering with a cascade, one section at a time.

    Each section is run forward and backward with :func:`filtfilt`, so the
    input must be longer than 6 samples.
    """
    sections = as_sections(cascade)
    logger.debug("sosfiltfilt: %d sections", len(sections))
    y = np.asarray(x)
    for s in sections:
        y = filtfilt(s.b, s.a, y)
    return y


class StreamingSOS:
    """Causal block-wise filter built from a cascade of sections.

    State is carried from one ``process`` call to the next, so a long signal
    can be filtered in arbitrary chunks.

    Methods:
        reset(zero=False): Restore the unit-step steady state, or zeros.
        process(x): Filter a new block of samples, returning the output.
    """

    def __init__(self, cascade: Cascade):
        self.sections = as_sections(cascade)
        self.reset()

    def reset(self, zero: bool = False):
        if zero:
            self.zi = np.zeros((len(self.sections), 2))
        else:
            self.zi = sosfilt_zi(self.sections)

    def process(self, x) -> np.ndarray:
        y = list(x)
        for k, s in enumerate(self.sections):
            z = [float(v) for v in self.zi[k]]
            y = list(_biquad(s, iter(y), z))
            self.zi[k] = z
        return np.asarray(y, dtype=float)
