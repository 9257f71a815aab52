"""Shared fixtures: a clean three-word SOS transmission."""

import pytest

from cwdecode.core import Token

# Three words, letter gaps inside, word gaps between
SOS_PATTERN = "... --- ... / ... --- ... / ... --- ..."

LETTER_S = [Token.DIT, Token.NOOP, Token.DIT, Token.NOOP, Token.DIT]
LETTER_O = [Token.DAH, Token.NOOP, Token.DAH, Token.NOOP, Token.DAH]
SOS = LETTER_S + [Token.END_LETTER] + LETTER_O + [Token.END_LETTER] + LETTER_S


@pytest.fixture
def sos_pattern():
    return SOS_PATTERN


@pytest.fixture
def sos_tokens():
    """Tokens for SOS_PATTERN followed by a 3-unit tail silence."""
    return SOS + [Token.END_WORD] + SOS + [Token.END_WORD] + SOS + [Token.END_LETTER]


@pytest.fixture
def sos_samples():
    """
    SOS_PATTERN as audio: 2 units lead, 3 units tail, 100 units total.

    At 8 kHz a 24 ms unit is 192 samples, exactly 3 chunks of 64, so
    the signal is 300 chunks = 3 full detector windows. 500 Hz puts a
    whole number of periods in every chunk.
    """
    from cwdecode.input import MorseSynthesizer

    synthesizer = MorseSynthesizer(sr=8000, tone_freq=500.0, unit_ms=24.0, amplitude=0.6)
    return synthesizer.synthesize(SOS_PATTERN, lead_units=2, tail_units=3)


@pytest.fixture
def sos_samples_44k():
    """
    SOS_PATTERN recorded at 44.1 kHz with a 40 ms unit.

    40 ms is 1764 samples here and 320 samples (5 chunks of 64) once
    resampled to 8 kHz, so the decoded signal is 500 chunks.
    """
    from cwdecode.input import MorseSynthesizer

    synthesizer = MorseSynthesizer(sr=44100, tone_freq=500.0, unit_ms=40.0, amplitude=0.6)
    return synthesizer.synthesize(SOS_PATTERN, lead_units=2, tail_units=3)
