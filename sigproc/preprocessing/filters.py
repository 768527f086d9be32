r"""Recursive (FIR/IIR) filtering evaluated as a lazy stream.

Overview
--------
A filter is described by its ``z``-space transfer function

.. math:: H(z) = \frac{b_0 + b_1 z^{-1} + \dots + b_N z^{-N}}
                      {a_0 + a_1 z^{-1} + \dots + a_M z^{-M}}

For an FIR filter ``a = [1]``. Coefficients are divided by ``a[0]`` on a
private copy and the shorter of ``a``/``b`` is padded with zeros to
``n = max(len(a), len(b))``.

Direct Form II Transposed
-------------------------
The filter is evaluated as a difference equation over a state vector ``z`` of
length ``n - 1``:

.. math::

    y[m]      &= b_0 x[m] + z_0 \\
    z_i       &= b_{i+1} x[m] + z_{i+1} - a_{i+1} y[m] \\
    z_{n-2}   &= b_{n-1} x[m] - a_{n-1} y[m]

Streaming
---------
``LinearFilter`` prepares coefficients and the initial state once, at
construction; ``apply`` then returns a generator that pulls exactly one input
sample for every output sample it yields. Open-ended inputs (generators,
sensor streams) are therefore never buffered. Sample types are not coerced:
ints, floats, complex numbers, ``Fraction`` and ``Decimal`` all work with
ordinary arithmetic. The default state and the padding use an integer zero,
which never converts them.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from sigproc.errors import InvalidArgument


def normalize_coefficients(b: Iterable, a: Iterable) -> Tuple[List, List]:
    """Divide ``b`` and ``a`` by ``a[0]`` and zero-pad them to equal length.

    Returns new lists; the caller's sequences are never modified.
    """
    b = list(b)
    a = list(a)
    if not a or not b:
        raise InvalidArgument("filter coefficients a and b must be non-empty")
    a0 = a[0]
    if a0 == 0:
        raise InvalidArgument("a[0] must be non-zero")
    n = max(len(a), len(b))
    # integer zero mixes with any numeric type without converting it
    a_norm = [c / a0 for c in a] + [0] * (n - len(a))
    b_norm = [c / a0 for c in b] + [0] * (n - len(b))
    return b_norm, a_norm


def filter_order(b: Sequence, a: Sequence) -> int:
    """Order of the filter ``(b, a)``: ``max(len(a), len(b)) - 1``."""
    return max(len(a), len(b)) - 1


def _df2t(b_norm: Sequence, a_norm: Sequence, xs: Iterator, z: List) -> Iterator:
    """Core DF-II-T recursion. ``z`` is updated in place as samples flow."""
    b0 = b_norm[0]
    b_tail = b_norm[1:]
    a_tail = a_norm[1:]
    last = len(z) - 1
    if last < 0:
        # order 0: pure gain
        for xm in xs:
            yield b0 * xm
        return
    for xm in xs:
        ym = b0 * xm + z[0]
        for i in range(last):
            z[i] = b_tail[i] * xm + z[i + 1] - a_tail[i] * ym
        z[last] = b_tail[last] * xm - a_tail[last] * ym
        yield ym


class LinearFilter:
    """FIR/IIR filter in Direct Form II Transposed structure.

    Args:
        b: Numerator coefficients.
        a: Denominator coefficients; ``a[0]`` must be non-zero.
        zi: Optional initial state of length ``max(len(a), len(b)) - 1``.
            Zeros are used when omitted.
    Raises:
        InvalidArgument: On empty coefficients, ``a[0] == 0`` or a ``zi`` of
            the wrong length.
    """

    def __init__(self, b: Iterable, a: Iterable, zi: Optional[Iterable] = None):
        self.b, self.a = normalize_coefficients(b, a)
        self.order = len(self.a) - 1
        if zi is None:
            self.zi = [0] * self.order
        else:
            self.zi = list(zi)
            if len(self.zi) != self.order:
                raise InvalidArgument(
                    f"zi must have length max(len(a), len(b)) - 1 = {self.order}, got {len(self.zi)}"
                )

    def apply(self, x: Iterable) -> Iterator:
        """Lazily filter ``x``; each call starts from a copy of ``zi``."""
        return _df2t(self.b, self.a, iter(x), list(self.zi))

    __call__ = apply

    def __repr__(self) -> str:
        return f"LinearFilter(b={self.b!r}, a={self.a!r})"


def lfilter(b: Iterable, a: Iterable, x: Iterable, zi: Optional[Iterable] = None) -> Iterator:
    """Filter ``x`` with ``(b, a)``, returning a lazy iterator of outputs.

    Argument validation happens immediately; no sample of ``x`` is read until
    the first output is requested.
    """
    return LinearFilter(b, a, zi).apply(x)
