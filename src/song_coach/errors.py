"""Exceptions raised by song_coach."""


class SongCoachError(Exception):
    """Base class for song_coach errors."""


class InvalidInputError(SongCoachError, ValueError):
    """Sample buffer cannot be analyzed (bad sample rate or shape)."""


class AudioLoadError(SongCoachError, OSError):
    """Audio file could not be read or decoded."""
