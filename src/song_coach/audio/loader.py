"""WAV loading into a mono SampleBuffer."""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Optional, Union

import numpy as np

from song_coach.audio.buffer import SampleBuffer
from song_coach.audio.config import AudioConfig
from song_coach.errors import AudioLoadError

logger = logging.getLogger(__name__)

# Full-scale divisors for integer PCM
_PCM_SCALE = {
    np.dtype(np.int16): 32768.0,
    np.dtype(np.int32): 2147483648.0,
}


def pcm_to_float(audio: np.ndarray) -> np.ndarray:
    """Convert integer or float PCM to float64 in [-1, 1]."""
    if audio.dtype == np.uint8:
        return (audio.astype(np.float64) - 128.0) / 128.0
    scale = _PCM_SCALE.get(audio.dtype)
    if scale is not None:
        return audio.astype(np.float64) / scale
    if np.issubdtype(audio.dtype, np.floating):
        return audio.astype(np.float64)
    raise AudioLoadError(f"Unsupported PCM sample type: {audio.dtype}")


def downmix(audio: np.ndarray, mode: str = "mean") -> np.ndarray:
    """Collapse (n_samples, n_channels) audio to mono."""
    if audio.ndim == 1:
        return audio
    if mode == "first":
        return audio[:, 0]
    if mode == "mean":
        return audio.mean(axis=1)
    raise ValueError(f"Unknown downmix mode: {mode!r}")


def load_wav(path: Union[str, Path], config: Optional[AudioConfig] = None) -> SampleBuffer:
    """Read a WAV file as a mono float SampleBuffer.

    Args:
        path: WAV file path.
        config: Loading options (downmix mode, expected rate).

    Returns:
        SampleBuffer with samples normalized to [-1, 1].

    Raises:
        AudioLoadError: File missing, unreadable, or at an unexpected rate.
    """
    import scipy.io.wavfile as wavfile

    config = config or AudioConfig()
    path = Path(path)
    if not path.exists():
        raise AudioLoadError(f"Audio file not found: {path}")
    try:
        sr, audio = wavfile.read(str(path))
    except (OSError, ValueError, EOFError, struct.error) as exc:
        raise AudioLoadError(f"Could not decode {path}: {exc}") from exc

    if config.expected_sample_rate is not None and sr != config.expected_sample_rate:
        raise AudioLoadError(
            f"Expected {config.expected_sample_rate} Hz, got {sr} Hz. Resample the file."
        )

    audio = pcm_to_float(audio)
    if audio.ndim > 1:
        logger.debug("Downmixing %d channels (%s)", audio.shape[1], config.downmix)
        audio = downmix(audio, config.downmix)
    logger.debug("Loaded %s: %d samples at %d Hz", path, len(audio), sr)
    return SampleBuffer.from_array(audio, sample_rate=int(sr))
