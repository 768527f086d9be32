"""Spectral analysis: FFT, inverse FFT, power spectral density and bandwidth.

The forward transform uses a real-input FFT, which returns only the unique
half of the spectrum (``N // 2 + 1`` bins). For real signals the full
spectrum is conjugate symmetric, ``H[N - k] = conj(H[k])``, so it is rebuilt
with a closed-form index map:

- even ``N``: bins ``0..N/2``, with a real Nyquist bin at ``N/2``, followed by
  the conjugates of bins ``N/2 - 1 .. 1``;
- odd ``N``: bins ``0..(N-1)/2`` followed by the conjugates of bins
  ``(N-1)/2 .. 1``. There is no Nyquist bin; the two bins either side of the
  midpoint are conjugates of each other.
"""
from __future__ import annotations

import math
from typing import Iterable, NamedTuple, Optional, Tuple, Union

import numpy as np

from sigproc.errors import InvalidArgument


class PowerSpectrum(NamedTuple):
    """One-sided power spectrum: ``freqs`` (Hz) and ``power`` per bin."""

    freqs: np.ndarray
    power: np.ndarray

    def pairs(self) -> list:
        """``(freq, power)`` tuples in ascending frequency."""
        return list(zip(self.freqs.tolist(), self.power.tolist()))


def _as_signal(x) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    if x.ndim != 1:
        raise InvalidArgument(f"signal must be one-dimensional, got shape {x.shape}")
    if x.size == 0:
        raise InvalidArgument("signal must contain at least one sample")
    return x


def _unpack_even(half: np.ndarray, n: int) -> np.ndarray:
    m = n // 2
    full = np.empty(n, dtype=complex)
    full[:m] = half[:m]
    full[m] = half[m].real
    full[m + 1:] = np.conj(half[m - 1:0:-1])
    return full


def _unpack_odd(half: np.ndarray, n: int) -> np.ndarray:
    m = (n - 1) // 2
    full = np.empty(n, dtype=complex)
    full[:m + 1] = half[:m + 1]
    full[m + 1:] = np.conj(half[m:0:-1])
    return full


def fft(x) -> np.ndarray:
    """Full-length FFT of a real signal.

    Args:
        x: Real samples (any length >= 1).
    Returns:
        Complex spectrum of ``len(x)`` bins, conjugate symmetric.
    """
    x = _as_signal(x)
    n = x.size
    half = np.fft.rfft(x)
    if n % 2 == 0:
        return _unpack_even(half, n)
    return _unpack_odd(half, n)


def ifft(h) -> np.ndarray:
    """Inverse of :func:`fft`.

    Only the unique half of ``h`` (bins ``0..N//2``) is used; the result is a
    real signal of ``len(h)`` samples.
    """
    h = np.asarray(h, dtype=complex)
    if h.ndim != 1 or h.size == 0:
        raise InvalidArgument(f"spectrum must be a non-empty 1D sequence, got shape {h.shape}")
    n = h.size
    return np.fft.irfft(h[:n // 2 + 1], n=n)


def next_pow2(n: Union[int, float]) -> int:
    """Smallest power of two >= ``n``; ``next_pow2(0) == next_pow2(1) == 2``."""
    if n < 0:
        raise InvalidArgument(f"n must be non-negative, got {n}")
    n = int(math.ceil(n))
    if n <= 2:
        return 2
    return 1 << (n - 1).bit_length()


def psd(x, fs: float = 1.0, nfft: Optional[int] = None) -> PowerSpectrum:
    """FFT-based power spectral density estimate.

    Steps: transform, keep the unique half (``N/2 + 1`` bins for even ``N``,
    ``(N + 1)/2`` for odd), take the magnitude, divide by ``N``, square, and
    double every bin except DC and Nyquist to account for the discarded
    mirror half.

    Args:
        x: Real samples.
        fs: Sampling frequency (Hz).
        nfft: Optional transform length >= ``len(x)``; the signal is
            zero-padded to it (e.g. ``next_pow2(len(x))``).
    Returns:
        PowerSpectrum with ``freqs[i] = i * fs / N``.
    """
    if fs <= 0:
        raise InvalidArgument(f"fs must be positive, got {fs}")
    x = _as_signal(x)
    if nfft is not None:
        if nfft < x.size:
            raise InvalidArgument(f"nfft must be >= len(x) = {x.size}, got {nfft}")
        x = np.concatenate([x, np.zeros(int(nfft) - x.size)])
    n = x.size
    nbins = n // 2 + 1 if n % 2 == 0 else (n + 1) // 2

    h = fft(x)
    p = (np.abs(h[:nbins]) / n) ** 2
    if n % 2 == 0:
        p[1:-1] *= 2.0
    else:
        p[1:] *= 2.0
    freqs = np.arange(nbins) * float(fs) / n
    return PowerSpectrum(freqs, p)


def _spectrum_arrays(spectrum) -> Tuple[np.ndarray, np.ndarray]:
    if isinstance(spectrum, PowerSpectrum):
        f, p = spectrum
    else:
        pairs = np.asarray(list(spectrum), dtype=float).reshape(-1, 2)
        f, p = pairs[:, 0], pairs[:, 1]
    f = np.asarray(f, dtype=float)
    p = np.asarray(p, dtype=float)
    if f.size == 0:
        raise InvalidArgument("power spectrum is empty")
    return f, p


def bandwidth(spectrum: Union[PowerSpectrum, Iterable[Tuple[float, float]]], fract: float = 0.95) -> float:
    """Frequency below which ``fract`` of the total power is contained.

    Power is accumulated bin by bin in ascending frequency; the frequency of
    the first bin at which the running sum reaches ``fract`` of the total is
    returned. If rounding keeps the sum below target, the highest frequency
    is returned.

    Args:
        spectrum: Result of :func:`psd`, or ``(freq, power)`` pairs.
        fract: Fraction of total power, strictly between 0 and 1.
    """
    if not 0.0 < fract < 1.0:
        raise InvalidArgument(f"fract must be in (0, 1), got {fract}")
    f, p = _spectrum_arrays(spectrum)
    target = float(np.sum(p)) * fract
    accum = 0.0
    for fk, pk in zip(f, p):
        accum += pk
        if accum >= target:
            return float(fk)
    return float(f[-1])


def mean_frequency(spectrum) -> float:
    """Mean frequency of the spectrum (power-weighted average)."""
    f, p = _spectrum_arrays(spectrum)
    num = np.sum(f * p)
    den = np.sum(p) + 1e-12
    return float(num / den)


def median_frequency(spectrum) -> float:
    """Median frequency of the spectrum (frequency splitting total power in half)."""
    return bandwidth(spectrum, 0.5)
