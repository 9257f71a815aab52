"""Audio loading and chunking utilities."""

import logging
import numpy as np
import librosa
from pathlib import Path
from typing import Iterator, Optional, Tuple

from ..core.constants import DEFAULT_CHUNK_SIZE, DEFAULT_SR, PCM_SCALE

logger = logging.getLogger(__name__)


def to_pcm(audio: np.ndarray) -> np.ndarray:
    """Convert float audio in [-1, 1] to signed 16-bit integer samples."""
    scaled = np.round(np.clip(audio, -1.0, 1.0) * PCM_SCALE)
    return scaled.astype(np.int16)


def chunk_samples(samples: np.ndarray, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[np.ndarray]:
    """
    Split a sample array into consecutive chunks.

    The final chunk is shorter when the length is not a multiple of
    chunk_size; empty chunks are never produced.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    for start in range(0, len(samples), chunk_size):
        yield samples[start:start + chunk_size]


class AudioLoader:
    """Handles audio file loading and chunking.

    Files are resampled to DEFAULT_SR by default. Chunk sizes are counted
    in samples, so decoding at one fixed rate keeps chunk and detector
    window durations independent of how a file was recorded.
    """

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg"}

    def __init__(
        self,
        target_sr: Optional[int] = DEFAULT_SR,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Resample to this rate (default: 8000); None keeps the
                file's own rate
            chunk_size: Samples per chunk yielded by ``chunks``
        """
        self.target_sr = target_sr
        self.chunk_size = chunk_size

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load an audio file as mono 16-bit integer samples.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (int16 sample array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        audio, sr = librosa.load(str(path), sr=self.target_sr, mono=True)
        logger.info("Loaded %s: %d samples at %d Hz", path.name, len(audio), sr)
        return to_pcm(audio), sr

    def chunks(self, path: str) -> Iterator[np.ndarray]:
        """Load a file and yield its samples chunk by chunk."""
        samples, _ = self.load(path)
        return chunk_samples(samples, self.chunk_size)

    def get_duration(self, samples: np.ndarray, sr: int) -> float:
        """Get duration in seconds."""
        return len(samples) / sr
