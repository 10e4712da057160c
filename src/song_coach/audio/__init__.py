"""Audio buffers, loading and configuration."""

from song_coach.audio.buffer import SampleBuffer
from song_coach.audio.config import AnalysisConfig, AudioConfig
from song_coach.audio.loader import load_wav

__all__ = [
    "AnalysisConfig",
    "AudioConfig",
    "SampleBuffer",
    "load_wav",
]
