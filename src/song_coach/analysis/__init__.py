"""Feature meters and the extractor that runs them."""

from song_coach.analysis.extractor import AnalysisResult, FeatureExtractor, analyze
from song_coach.analysis.meters import (
    LoudnessMeter,
    LoudnessVariationMeter,
    RhythmConsistencyMeter,
    StabilityProxyMeter,
)

__all__ = [
    "AnalysisResult",
    "FeatureExtractor",
    "LoudnessMeter",
    "LoudnessVariationMeter",
    "RhythmConsistencyMeter",
    "StabilityProxyMeter",
    "analyze",
]
