"""Configuration for the signal processing core.

``SignalConfig`` centralizes tunable parameters (sampling, low-pass design,
bandwidth fraction, numeric tolerances) so scripts and tests share a
consistent setup. ``Settings`` holds environment-driven options such as the
log level and the directory holding reference fixtures.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass
class SignalConfig:
    """Top-level configuration for filtering and spectral analysis.

    Attributes:
        sample_rate_hz: Sampling rate (Hz).
        lowpass_cutoff_hz: Cutoff for the Butterworth low-pass (Hz).
        butter_order: Butterworth order; must be even for SOS design.
        bandwidth_fraction: Fraction of total power used by ``bandwidth``.
        transient_factor: Multiple of the filter order used as reflected
            padding length in zero-phase filtering.
        pivot_tolerance: Relative pivot magnitude below which a linear system
            is treated as singular.
    """

    # Sampling
    sample_rate_hz: float = 500.0

    # Filter design
    lowpass_cutoff_hz: float = 20.0
    butter_order: int = 4

    # Spectral analysis
    bandwidth_fraction: float = 0.95

    # Numerics
    transient_factor: int = 3
    pivot_tolerance: float = 1e-12

    @property
    def nyquist_hz(self) -> float:
        return 0.5 * float(self.sample_rate_hz)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SIGPROC_", env_file=".env", extra="ignore")

    log_level: str = "WARNING"
    fixtures_dir: str = str(Path(__file__).resolve().parents[1] / "tests" / "data")


settings = Settings()

# Shared defaults used when callers do not pass their own config.
DEFAULT_CONFIG = SignalConfig()
