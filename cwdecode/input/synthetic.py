"""Synthetic keyed-tone generation for demos and tests.

Patterns use ``.`` and ``-`` for tones, a space for a letter gap, ``/``
for a word gap and ``|`` for a pause. The gap between elements of one
letter is inserted automatically; adjacent gap characters merge into
the longest of them.
"""

from typing import List, Optional

import numpy as np

from ..core import Run
from ..core.constants import (
    DEFAULT_SR,
    DEFAULT_TONE_FREQ,
    DIT_UNITS,
    DAH_UNITS,
    INTRA_GAP_UNITS,
    LETTER_GAP_UNITS,
    WORD_GAP_UNITS,
    PAUSE_UNITS,
    PCM_SCALE,
)

TONE_UNITS = {".": DIT_UNITS, "-": DAH_UNITS}
GAP_UNITS = {" ": LETTER_GAP_UNITS, "/": WORD_GAP_UNITS, "|": PAUSE_UNITS}


def _add_silence(runs: List[Run], units: int) -> None:
    if units <= 0:
        return
    if runs and not runs[-1].state:
        runs[-1] = Run(False, max(runs[-1].duration, units))
    else:
        runs.append(Run(False, units))


def pattern_to_runs(pattern: str, lead_units: int = 0, tail_units: int = 0) -> List[Run]:
    """
    Convert a dot/dash pattern into runs measured in units.

    Args:
        pattern: Pattern string, e.g. "... --- ..."
        lead_units: Silence before the first tone
        tail_units: Minimum silence after the last tone

    Raises:
        ValueError: On characters outside the pattern alphabet
    """
    runs: List[Run] = []
    _add_silence(runs, lead_units)
    for ch in pattern:
        if ch in TONE_UNITS:
            if runs and runs[-1].state:
                runs.append(Run(False, INTRA_GAP_UNITS))
            runs.append(Run(True, TONE_UNITS[ch]))
        elif ch in GAP_UNITS:
            _add_silence(runs, GAP_UNITS[ch])
        else:
            raise ValueError(f"Invalid pattern character: {ch!r}")
    _add_silence(runs, tail_units)
    return runs


def pattern_to_events(
    pattern: str,
    events_per_unit: int = 1,
    lead_units: int = 0,
    tail_units: int = 0,
) -> List[bool]:
    """Tone events for a pattern, ``events_per_unit`` events per unit."""
    events: List[bool] = []
    for run in pattern_to_runs(pattern, lead_units, tail_units):
        events.extend([run.state] * (run.duration * events_per_unit))
    return events


class MorseSynthesizer:
    """Generate a keyed sine wave as 16-bit integer samples."""

    def __init__(
        self,
        sr: int = DEFAULT_SR,
        tone_freq: float = DEFAULT_TONE_FREQ,
        unit_ms: float = 60.0,
        amplitude: float = 0.5,
        noise: float = 0.0,
        seed: Optional[int] = None,
    ):
        """
        Initialize MorseSynthesizer.

        Args:
            sr: Sample rate in Hz
            tone_freq: Tone frequency in Hz
            unit_ms: Length of one unit (a dit) in milliseconds
            amplitude: Tone peak amplitude in [0, 1]
            noise: Standard deviation of added white noise in [0, 1]
            seed: Seed for the noise generator
        """
        self.sr = sr
        self.tone_freq = tone_freq
        self.unit_ms = unit_ms
        self.amplitude = amplitude
        self.noise = noise
        self._rng = np.random.default_rng(seed)

    @property
    def unit_samples(self) -> int:
        """Samples per unit."""
        return int(round(self.sr * self.unit_ms / 1000.0))

    def keying(self, pattern: str, lead_units: int = 2, tail_units: int = 3) -> np.ndarray:
        """Per-sample key state (1.0 = tone) for a pattern."""
        runs = pattern_to_runs(pattern, lead_units, tail_units)
        if not runs:
            return np.zeros(0)
        unit = self.unit_samples
        return np.concatenate(
            [np.full(run.duration * unit, float(run.state)) for run in runs]
        )

    def synthesize(self, pattern: str, lead_units: int = 2, tail_units: int = 3) -> np.ndarray:
        """
        Synthesize a pattern.

        Returns:
            int16 sample array
        """
        key = self.keying(pattern, lead_units, tail_units)
        t = np.arange(len(key)) / self.sr
        wave = self.amplitude * np.sin(2 * np.pi * self.tone_freq * t) * key
        if self.noise > 0:
            wave = wave + self._rng.normal(0.0, self.noise, len(wave))
        scaled = np.round(np.clip(wave, -1.0, 1.0) * PCM_SCALE)
        return scaled.astype(np.int16)
