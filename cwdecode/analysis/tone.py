"""Tone detection - turn raw sample chunks into tone/silence events.

No fixed amplitude threshold is used: transmission volume and noise
floor change from session to session, so every window of amplitudes
gets its own discriminator halfway between its quietest and loudest
value.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Sequence

import numpy as np

from ..core.constants import DEFAULT_DETECTOR_WINDOW

logger = logging.getLogger(__name__)


def compute_energy(chunk: Sequence[int]) -> float:
    """
    Population RMS deviation of a chunk from its mean.

    Equal to sqrt(mean(x**2) - mean(x)**2), evaluated in the centered
    form so that a constant chunk yields exactly 0.

    Args:
        chunk: Non-empty sequence of signed integer samples

    Returns:
        Non-negative amplitude estimate

    Raises:
        ValueError: If the chunk is empty
    """
    samples = np.asarray(chunk, dtype=np.float64)
    if samples.size == 0:
        raise ValueError("Sample chunks must be non-empty")
    deviation = samples - samples.mean()
    return float(np.sqrt(np.mean(deviation * deviation)))


def discriminator(amplitudes: Sequence[float]) -> float:
    """Threshold halfway between the smallest and biggest amplitude."""
    values = np.asarray(amplitudes, dtype=np.float64)
    smallest = values.min()
    biggest = values.max()
    return float(smallest + (biggest - smallest) / 2)


def quantize(amplitudes: Sequence[float], threshold: Optional[float] = None) -> List[bool]:
    """
    Quantize a window of amplitudes to tone (True) or silence (False).

    The discriminator is min + (max - min) / 2 over the window and the
    comparison is inclusive. A flat window, such as one lying entirely
    inside a long silence, therefore quantizes to all tone.

    Args:
        amplitudes: Window of amplitudes
        threshold: Use this discriminator instead of the window's own
    """
    if len(amplitudes) == 0:
        return []
    values = np.asarray(amplitudes, dtype=np.float64)
    if threshold is None:
        threshold = discriminator(values)
    logger.debug(
        "Window of %d amplitudes: min=%.1f max=%.1f discriminator=%.1f",
        len(values), values.min(), values.max(), threshold,
    )
    return [bool(v) for v in values >= threshold]


class ToneDetector:
    """Windowed tone/silence detector.

    Buffers exactly one window of amplitudes, quantizes it as a whole,
    emits all of its events and starts over.
    """

    def __init__(
        self,
        window_size: int = DEFAULT_DETECTOR_WINDOW,
        flush_partial: bool = True,
    ):
        """
        Initialize ToneDetector.

        Args:
            window_size: Amplitudes per discriminator; larger windows are
                more stable but slower to follow volume changes
            flush_partial: Quantize a trailing partial window at end of
                stream (True) or discard it (False)
        """
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        self.window_size = window_size
        self.flush_partial = flush_partial
        self._window: List[float] = []
        self.threshold: Optional[float] = None  # discriminator of the last full window
        self.discarded = 0

    @property
    def pending(self) -> int:
        """Number of amplitudes buffered toward the next window."""
        return len(self._window)

    def push(self, amplitude: float) -> List[bool]:
        """Buffer one amplitude; return the window's events once it is full."""
        self._window.append(amplitude)
        if len(self._window) < self.window_size:
            return []
        window, self._window = self._window, []
        self.threshold = discriminator(window)
        return quantize(window, self.threshold)

    def feed(self, chunk: Sequence[int]) -> List[bool]:
        """Compute the energy of a chunk and push it."""
        return self.push(compute_energy(chunk))

    def flush(self) -> List[bool]:
        """
        Apply the end-of-stream policy to a trailing partial window.

        A flushed partial window is quantized against the last full
        window's discriminator. Its own min/max is used only when the
        stream was shorter than one window.
        """
        window, self._window = self._window, []
        if not window:
            return []
        if not self.flush_partial:
            logger.debug("Discarding partial window of %d amplitudes", len(window))
            self.discarded += len(window)
            return []
        logger.debug("Flushing partial window of %d amplitudes", len(window))
        return quantize(window, self.threshold)

    def detect(self, chunks: Iterable[Sequence[int]]) -> Iterator[bool]:
        """Stream tone events for a sequence of sample chunks."""
        for chunk in chunks:
            yield from self.feed(chunk)
        yield from self.flush()
