"""Decoder configuration."""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from .constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DETECTOR_WINDOW,
    DEFAULT_UNIT_GROUP,
    DEFAULT_QUEUE_SIZE,
)


@dataclass
class DecoderConfig:
    """Configuration for the decoding pipeline.

    Attributes:
        chunk_size: Samples per chunk handed to the tone detector (default: 64)
        detector_window: Amplitudes per tone/silence discriminator (default: 100)
        unit_group: Runs per unit estimate (default: 20)
        flush_partial: At end of stream, classify a trailing partial window
            or group with its own statistics instead of discarding it (default: True)
        initial_state: Look-behind state of the rhythm encoder (default: False, silence)
        skip_leading_silence: Drop runs before the first tone so that
            classification starts on a tone (default: True)
        queue_size: Capacity of each inter-stage queue in threaded mode (default: 1)
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    detector_window: int = DEFAULT_DETECTOR_WINDOW
    unit_group: int = DEFAULT_UNIT_GROUP
    flush_partial: bool = True
    initial_state: bool = False
    skip_leading_silence: bool = True
    queue_size: int = DEFAULT_QUEUE_SIZE

    def validate(self) -> "DecoderConfig":
        """Raise ValueError for sizes that cannot work; return self."""
        for name in ("chunk_size", "detector_window", "unit_group", "queue_size"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return asdict(self)
