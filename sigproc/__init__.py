"""Digital signal processing core: filtering and spectral analysis.

Modules are organized by stage:
- preprocessing: streaming FIR/IIR filter, SOS cascades, Butterworth design,
  zero-phase filtering, windows
- features: FFT, inverse FFT, PSD, bandwidth
- io: line-oriented reference signal files
- utils: small helpers (linear solver, detrending)
"""
from .errors import InvalidArgument, NumericFailure, SignalError
from .preprocessing import (
    LinearFilter,
    SOSSection,
    StreamingSOS,
    butter_sos_even,
    filtfilt,
    lfilter,
    lfilter_zi,
    sosfilt,
    sosfiltfilt,
)
from .features import bandwidth, fft, ifft, next_pow2, psd

__version__ = "0.1.0"
