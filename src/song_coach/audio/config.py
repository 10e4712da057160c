"""Centralized audio loading and analysis configuration.

Window policies:
- Loudness variation: fixed 4410-sample windows (100 ms only at 44.1 kHz)
- Pitch stability proxy: 100 ms windows, trailing partial window dropped
- Rhythm consistency: 500 ms windows, trailing partial window kept
"""

from dataclasses import dataclass
from typing import Optional

VOLUME_WINDOW_SAMPLES = 4410
STABILITY_WINDOW_SEC = 0.1
RHYTHM_WINDOW_SEC = 0.5


@dataclass(frozen=True)
class AudioConfig:
    """Decoded-audio loading configuration."""

    # "mean" averages all channels, "first" keeps channel 0
    downmix: str = "mean"

    # Reject files at any other rate when set
    expected_sample_rate: Optional[int] = None


@dataclass(frozen=True)
class AnalysisConfig:
    """Window sizes for the feature meters."""

    # Sample count, not a duration
    volume_window_samples: int = VOLUME_WINDOW_SAMPLES

    stability_window_sec: float = STABILITY_WINDOW_SEC
    rhythm_window_sec: float = RHYTHM_WINDOW_SEC
