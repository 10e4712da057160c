"""Feature extraction: run the four meters over one buffer and collect results."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Optional

from song_coach.analysis.meters import (
    LoudnessMeter,
    LoudnessVariationMeter,
    RhythmConsistencyMeter,
    StabilityProxyMeter,
)
from song_coach.audio.buffer import SampleBuffer
from song_coach.audio.config import AnalysisConfig
from song_coach.errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Scalar descriptors of one recording."""

    duration_seconds: float     # one decimal
    avg_volume: float           # mean |sample| x 100, [0, 100]
    volume_variation: float     # std-dev of window loudness, three decimals
    pitch_stability: float      # % of windows with zero-crossings, [0, 100]
    rhythm_consistency: float   # 100 / (1 + energy variance), [0, 100]

    def to_dict(self) -> Dict[str, Any]:
        """Result keyed by the names the feedback prompt uses."""
        return {
            "duration": self.duration_seconds,
            "avgVolume": self.avg_volume,
            "volumeVariation": self.volume_variation,
            "pitchStability": self.pitch_stability,
            "rhythmConsistency": self.rhythm_consistency,
        }

    def summary(self) -> str:
        """One-line description in the feedback prompt's audio format."""
        return (
            f"Audio: {self.duration_seconds:.1f}s, "
            f"Volume: {self.avg_volume:.1f}%, "
            f"Variation: {self.volume_variation:.3f}, "
            f"Stability: {self.pitch_stability:.1f}%, "
            f"Rhythm: {self.rhythm_consistency:.1f}%"
        )


class FeatureExtractor:
    """Compute loudness, loudness variation, stability and rhythm descriptors.

    Interface:
      extractor = FeatureExtractor(AnalysisConfig())
      result = extractor.extract(SampleBuffer.from_array(samples, 44_100))

    The meters share the buffer read-only and do not depend on each other;
    parallel=True runs them on a thread pool with identical results.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None, parallel: bool = False):
        self.config = config or AnalysisConfig()
        self.parallel = parallel
        self.loudness = LoudnessMeter()
        self.loudness_variation = LoudnessVariationMeter(self.config.volume_window_samples)
        self.stability = StabilityProxyMeter(self.config.stability_window_sec)
        self.rhythm = RhythmConsistencyMeter(self.config.rhythm_window_sec)

    def extract(self, buffer: SampleBuffer) -> AnalysisResult:
        """Analyze one buffer.

        Raises:
            InvalidInputError: buffer is not a SampleBuffer with a positive rate.
        """
        if not isinstance(buffer, SampleBuffer):
            raise InvalidInputError(f"expected SampleBuffer, got {type(buffer).__name__}")
        # Guards buffers whose fields were set with object.__setattr__ after __post_init__
        if buffer.sample_rate <= 0:
            raise InvalidInputError(f"sample_rate must be > 0, got {buffer.sample_rate}")

        logger.debug(
            "Extracting features from %d samples at %d Hz",
            len(buffer),
            buffer.sample_rate,
        )
        meters = (self.loudness, self.loudness_variation, self.stability, self.rhythm)
        if self.parallel:
            with ThreadPoolExecutor(max_workers=len(meters)) as pool:
                futures = [pool.submit(m.measure, buffer) for m in meters]
                values = [f.result() for f in futures]
        else:
            values = [m.measure(buffer) for m in meters]
        avg_volume, volume_variation, pitch_stability, rhythm_consistency = values

        result = AnalysisResult(
            duration_seconds=round(buffer.duration_seconds, 1),
            avg_volume=avg_volume,
            volume_variation=volume_variation,
            pitch_stability=pitch_stability,
            rhythm_consistency=rhythm_consistency,
        )
        logger.debug("Analysis result: %s", result)
        return result


def analyze(buffer: SampleBuffer, config: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """Shortcut for FeatureExtractor(config).extract(buffer)."""
    return FeatureExtractor(config).extract(buffer)
