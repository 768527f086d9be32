"""Small helpers: dense solver and trend removal."""
from .linalg import solve
from .signals import dc_offset, detrend, detrend_mean
