"""Processing layer - Timing post-processing.

This layer turns tone events into timing information:
- Run-length encoding (rhythm)
- Unit estimation and duration clamping
"""

from .rhythm import RhythmEncoder, skip_leading_silence, expand_runs
from .quantize import UnitNormalizer, estimate_unit, normalize, clamp

__all__ = [
    "RhythmEncoder",
    "skip_leading_silence",
    "expand_runs",
    "UnitNormalizer",
    "estimate_unit",
    "normalize",
    "clamp",
]
