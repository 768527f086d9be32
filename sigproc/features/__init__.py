"""Spectral features: FFT, PSD, bandwidth and summary frequencies."""
from .spectral import (
    PowerSpectrum,
    bandwidth,
    fft,
    ifft,
    mean_frequency,
    median_frequency,
    next_pow2,
    psd,
)
