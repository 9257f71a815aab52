"""Unit normalization - snap run durations to the Morse unit grid.

The local "1 unit" is estimated from a group of recent runs and every
duration in the group is mapped onto the canonical counts 1, 3, 7, 10.
"""

import logging
from collections import deque
from typing import Deque, Iterable, Iterator, List, Sequence

from ..core import Run
from ..core.constants import (
    DEFAULT_UNIT_GROUP,
    DIT_UNITS,
    DAH_UNITS,
    INTRA_GAP_UNITS,
    LETTER_GAP_UNITS,
    WORD_GAP_UNITS,
    PAUSE_UNITS,
    UNCLASSIFIABLE,
    SHORT_BAND_MAX,
    LETTER_BAND_MAX,
    WORD_BAND_MAX,
)

logger = logging.getLogger(__name__)


def estimate_unit(durations: Sequence[int]) -> int:
    """
    Estimate the duration of one unit as the 25th percentile duration.

    1-unit silences are the most common element of a normal Morse
    phrase, so they fill the bottom of the sorted pile. The 25th
    percentile rather than the minimum avoids a single tiny run left by
    a quantization glitch.

    Args:
        durations: Run durations of one analysis group

    Returns:
        sorted(durations)[len(durations) // 4]

    Raises:
        ValueError: If durations is empty
    """
    if len(durations) == 0:
        raise ValueError("Cannot estimate a unit from an empty group")
    ordered = sorted(durations)
    return ordered[len(ordered) // 4]


def normalize(duration: int, unit: float) -> float:
    """Express a duration in units (true division)."""
    return duration / unit


def clamp(ratio: float, tone: bool) -> int:
    """
    Clamp a duration ratio to a canonical unit count.

    Band limits are inclusive at the top: 2.0 is still short and 8.0
    is still a word gap. Tones longer than 5 units do not exist and
    come back as UNCLASSIFIABLE.
    """
    if tone:
        if ratio <= SHORT_BAND_MAX:
            return DIT_UNITS
        if ratio <= LETTER_BAND_MAX:
            return DAH_UNITS
        return UNCLASSIFIABLE
    if ratio <= SHORT_BAND_MAX:
        return INTRA_GAP_UNITS
    if ratio <= LETTER_BAND_MAX:
        return LETTER_GAP_UNITS
    if ratio <= WORD_BAND_MAX:
        return WORD_GAP_UNITS
    return PAUSE_UNITS


class UnitNormalizer:
    """Group-wise unit estimation and clamping.

    Runs are buffered into fixed-size groups. The unit is computed once
    per group and applied to every run in it, so output lags input by
    one group and earlier classifications are never revised.
    """

    def __init__(
        self,
        group_size: int = DEFAULT_UNIT_GROUP,
        flush_partial: bool = True,
        history: int = 64,
    ):
        """
        Initialize UnitNormalizer.

        Args:
            group_size: Runs per unit estimate
            flush_partial: Normalize a trailing partial group with its own
                unit estimate (True) or discard it (False)
            history: Number of recent unit estimates kept in ``units``
        """
        if group_size < 1:
            raise ValueError(f"group_size must be >= 1, got {group_size}")
        self.group_size = group_size
        self.flush_partial = flush_partial
        self.units: Deque[int] = deque(maxlen=history)
        self.discarded = 0
        self._group: List[Run] = []

    @property
    def pending(self) -> int:
        """Number of runs buffered toward the next group."""
        return len(self._group)

    def push(self, run: Run) -> List[int]:
        """Buffer one run; return canonical counts once the group is full."""
        self._group.append(run)
        if len(self._group) < self.group_size:
            return []
        group, self._group = self._group, []
        return self._normalize_group(group)

    def flush(self) -> List[int]:
        """Apply the end-of-stream policy to a trailing partial group."""
        group, self._group = self._group, []
        if not group:
            return []
        if not self.flush_partial:
            logger.debug("Discarding partial group of %d runs", len(group))
            self.discarded += len(group)
            return []
        logger.debug("Flushing partial group of %d runs", len(group))
        return self._normalize_group(group)

    def normalize_runs(self, runs: Iterable[Run]) -> Iterator[int]:
        """Stream canonical counts for a sequence of runs."""
        for run in runs:
            yield from self.push(run)
        yield from self.flush()

    def _normalize_group(self, group: List[Run]) -> List[int]:
        unit = estimate_unit([run.duration for run in group])
        self.units.append(unit)
        logger.debug("Group of %d runs: unit=%d events", len(group), unit)
        return [clamp(normalize(run.duration, unit), run.state) for run in group]
