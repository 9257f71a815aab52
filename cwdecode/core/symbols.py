"""Token and Run data classes - the units flowing between pipeline stages."""

from dataclasses import dataclass
from enum import Enum


class Token(Enum):
    """One symbol of the decoder's output alphabet."""

    DIT = "dit"
    DAH = "dah"
    END_LETTER = "end_letter"
    END_WORD = "end_word"
    PAUSE = "pause"
    NOOP = "noop"
    ERROR = "error"


@dataclass(frozen=True)
class Run:
    """A maximal stretch of identical tone events."""

    state: bool  # True = tone, False = silence
    duration: int  # Number of consecutive events

    def __post_init__(self):
        if self.duration < 1:
            raise ValueError(f"Run duration must be positive, got {self.duration}")

    @property
    def is_tone(self) -> bool:
        return self.state
