"""Scalar feature meters over a decoded sample buffer.

Each meter is one linear pass over the shared read-only sample array.
Windows are taken as index-range views, so no meter copies the buffer.
Any division by a window or sample count is guarded: degenerate input
(empty buffer, buffer shorter than a window, window of zero samples)
yields 0.0 instead of NaN.

Minimal deps: numpy only.
"""

from __future__ import annotations

import logging
from typing import Iterator, Tuple

import numpy as np

from song_coach.audio.buffer import SampleBuffer
from song_coach.audio.config import (
    RHYTHM_WINDOW_SEC,
    STABILITY_WINDOW_SEC,
    VOLUME_WINDOW_SAMPLES,
)

logger = logging.getLogger(__name__)


def _window_bounds(n: int, size: int, include_partial: bool) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) for consecutive windows of `size` over n samples."""
    last_start = n if include_partial else n - size + 1
    for start in range(0, last_start, size):
        yield start, min(start + size, n)


def _population_variance(values: np.ndarray) -> float:
    """Variance dividing by the count; 0.0 for fewer than two values."""
    if values.size < 2:
        return 0.0
    return float(np.var(values))


def count_zero_crossings(window: np.ndarray) -> int:
    """Sign changes between consecutive samples (0.0 counts as non-negative)."""
    if window.size < 2:
        return 0
    negative = window < 0
    return int(np.count_nonzero(negative[1:] != negative[:-1]))


class LoudnessMeter:
    """Average absolute amplitude, scaled to a 0-100 percentage."""

    def measure(self, buffer: SampleBuffer) -> float:
        n = len(buffer.samples)
        if n == 0:
            logger.debug("Loudness: empty buffer, returning 0.0")
            return 0.0
        mean_abs = float(np.sum(np.abs(buffer.samples))) / n
        return round(mean_abs * 100, 1)


class LoudnessVariationMeter:
    """Population std-dev of per-window loudness over fixed-count windows.

    The window is a sample count, so its duration depends on the source
    rate (100 ms only at 44.1 kHz). A trailing partial window is kept and,
    like full windows, its absolute sum is divided by the nominal window
    size.
    """

    def __init__(self, window_samples: int = VOLUME_WINDOW_SAMPLES):
        if window_samples < 1:
            raise ValueError("window_samples must be >= 1")
        self.window_samples = window_samples

    def window_levels(self, buffer: SampleBuffer) -> np.ndarray:
        """Per-window mean absolute amplitude."""
        data = buffer.samples
        levels = [
            float(np.sum(np.abs(data[start:end]))) / self.window_samples
            for start, end in _window_bounds(len(data), self.window_samples, include_partial=True)
        ]
        return np.asarray(levels, dtype=np.float64)

    def measure(self, buffer: SampleBuffer) -> float:
        levels = self.window_levels(buffer)
        if levels.size == 0:
            logger.debug("Loudness variation: no windows, returning 0.0")
            return 0.0
        return round(float(np.sqrt(_population_variance(levels))), 3)


class StabilityProxyMeter:
    """Percentage of 100 ms windows containing at least one zero-crossing.

    A coarse voiced-vs-silent proxy; no frequency is estimated. Only full
    windows are inspected, and the denominator is floor(n / window)
    computed on its own rather than from the iteration count.
    """

    def __init__(self, window_sec: float = STABILITY_WINDOW_SEC):
        if window_sec <= 0:
            raise ValueError("window_sec must be > 0")
        self.window_sec = window_sec

    def window_samples(self, sample_rate: int) -> int:
        return int(sample_rate * self.window_sec)

    def measure(self, buffer: SampleBuffer) -> float:
        data = buffer.samples
        size = self.window_samples(buffer.sample_rate)
        if size == 0:
            logger.debug(
                "Pitch stability: %d Hz too low for %.3f s windows, returning 0.0",
                buffer.sample_rate,
                self.window_sec,
            )
            return 0.0
        total_slots = len(data) // size
        if total_slots == 0:
            logger.debug("Pitch stability: shorter than one window, returning 0.0")
            return 0.0

        stable = 0
        for start, end in _window_bounds(len(data), size, include_partial=False):
            if count_zero_crossings(data[start:end]) > 0:
                stable += 1
        return round(stable / total_slots * 100, 1)


class RhythmConsistencyMeter:
    """Inverse-variance score of per-window energy over 500 ms windows.

    Score = 100 / (1 + variance): identical window energies give 100, and
    the score falls toward 0 as energy spreads. A trailing partial window
    is included.
    """

    def __init__(self, window_sec: float = RHYTHM_WINDOW_SEC):
        if window_sec <= 0:
            raise ValueError("window_sec must be > 0")
        self.window_sec = window_sec

    def window_samples(self, sample_rate: int) -> int:
        return int(sample_rate * self.window_sec)

    def window_energies(self, buffer: SampleBuffer) -> np.ndarray:
        """Sum of squared samples per window."""
        data = buffer.samples
        size = self.window_samples(buffer.sample_rate)
        if size == 0:
            return np.zeros(0, dtype=np.float64)
        energies = []
        for start, end in _window_bounds(len(data), size, include_partial=True):
            window = data[start:end]
            energies.append(float(np.dot(window, window)))
        return np.asarray(energies, dtype=np.float64)

    def measure(self, buffer: SampleBuffer) -> float:
        energies = self.window_energies(buffer)
        if energies.size == 0:
            logger.debug("Rhythm consistency: no windows, returning 0.0")
            return 0.0
        variance = _population_variance(energies)
        return round(1.0 / (1.0 + variance) * 100, 1)
