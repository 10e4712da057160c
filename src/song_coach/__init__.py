"""Singing-performance analysis - sample buffers, feature meters, WAV loading, CLI."""

from song_coach.analysis import AnalysisResult, FeatureExtractor, analyze
from song_coach.audio import SampleBuffer
from song_coach.errors import AudioLoadError, InvalidInputError, SongCoachError

__all__ = [
    "AnalysisResult",
    "AudioLoadError",
    "FeatureExtractor",
    "InvalidInputError",
    "SampleBuffer",
    "SongCoachError",
    "analyze",
]
