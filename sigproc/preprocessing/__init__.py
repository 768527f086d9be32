"""Filtering subpackage.
Exports the streaming filter, SOS cascades, Butterworth design, zero-phase
filtering and window functions.
"""
from .filters import LinearFilter, lfilter, normalize_coefficients
from .filtfilt import filtfilt, lfilter_zi
from .sos import SOSSection, StreamingSOS, as_sections, sosfilt, sosfilt_zi, sosfiltfilt
from .butter import butter_sos_even, design_lowpass_sos
from .window import hann, rectwin, tukeywin
