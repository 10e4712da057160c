"""Decoded mono sample buffer shared by every feature meter."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from song_coach.errors import InvalidInputError

ArrayLike = Union[np.ndarray, Sequence[float]]


@dataclass(frozen=True, eq=False)
class SampleBuffer:
    """Mono float samples plus the rate they were captured at.

    The sample array is stored read-only so meters can share it without
    copying. Duration is always derived from the sample count.

    Interface:
      buffer = SampleBuffer.from_array(samples, sample_rate=44_100)
      buffer.duration_seconds
    """

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        rate = self.sample_rate
        if isinstance(rate, bool) or not isinstance(rate, numbers.Integral):
            raise InvalidInputError(f"sample_rate must be an integer, got {rate!r}")
        if rate <= 0:
            raise InvalidInputError(f"sample_rate must be > 0, got {rate}")

        samples = np.asarray(self.samples, dtype=np.float64)
        if samples.ndim != 1:
            raise InvalidInputError(
                f"samples must be mono (1-D), got shape {samples.shape}; downmix first"
            )
        # Caller arrays and views of them are copied; fresh conversions are kept
        if samples is self.samples or samples.base is not None:
            samples = samples.copy()
        samples.flags.writeable = False
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "sample_rate", int(rate))

    @classmethod
    def from_array(cls, samples: ArrayLike, sample_rate: int) -> "SampleBuffer":
        """Build a buffer from any 1-D float sequence.

        An ndarray passed in is copied, so later edits by the caller (or to
        the array it views) cannot reach the buffer.
        """
        return cls(samples=samples, sample_rate=sample_rate)  # type: ignore[arg-type]

    @property
    def duration_seconds(self) -> float:
        """Length in seconds (len(samples) / sample_rate)."""
        return len(self.samples) / self.sample_rate

    def __len__(self) -> int:
        return len(self.samples)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleBuffer):
            return NotImplemented
        return self.sample_rate == other.sample_rate and np.array_equal(
            self.samples, other.samples
        )

    __hash__ = None  # type: ignore[assignment]
