"""Token classification - canonical durations to semantic tokens.

A two-state machine alternating between expecting a tone and expecting
a silence. Invalid input yields an ERROR token and the machine moves on
("skip and resynchronize"); it never halts.
"""

from enum import Enum
from typing import Dict, Iterable, Iterator

from ..core import Token
from ..core.constants import (
    DIT_UNITS,
    DAH_UNITS,
    INTRA_GAP_UNITS,
    LETTER_GAP_UNITS,
    WORD_GAP_UNITS,
    PAUSE_UNITS,
)


class ClassifierState(Enum):
    """What the next canonical duration is expected to describe."""

    EXPECT_TONE = "expect_tone"
    EXPECT_SILENCE = "expect_silence"


TONE_TOKENS: Dict[int, Token] = {
    DIT_UNITS: Token.DIT,
    DAH_UNITS: Token.DAH,
}

SILENCE_TOKENS: Dict[int, Token] = {
    INTRA_GAP_UNITS: Token.NOOP,
    LETTER_GAP_UNITS: Token.END_LETTER,
    WORD_GAP_UNITS: Token.END_WORD,
    PAUSE_UNITS: Token.PAUSE,
}


class TokenClassifier:
    """Translate canonical durations into tokens.

    Relies on the rhythm encoder's alternation; it does not check it.
    """

    def __init__(self):
        self.state = ClassifierState.EXPECT_TONE

    def reset(self) -> None:
        self.state = ClassifierState.EXPECT_TONE

    def classify(self, units: int) -> Token:
        """Classify one canonical duration and advance the state."""
        if self.state is ClassifierState.EXPECT_TONE:
            token = TONE_TOKENS.get(units, Token.ERROR)
            self.state = ClassifierState.EXPECT_SILENCE
        else:
            token = SILENCE_TOKENS.get(units, Token.ERROR)
            self.state = ClassifierState.EXPECT_TONE
        return token

    def classify_stream(self, values: Iterable[int]) -> Iterator[Token]:
        """Stream tokens for a sequence of canonical durations."""
        for units in values:
            yield self.classify(units)
