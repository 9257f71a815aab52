"""Core types and constants for cwdecode."""

from .symbols import Token, Run
from .config import DecoderConfig
from .constants import (
    DEFAULT_SR,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TONE_FREQ,
    DEFAULT_DETECTOR_WINDOW,
    DEFAULT_UNIT_GROUP,
    UNCLASSIFIABLE,
)

__all__ = [
    "Token",
    "Run",
    "DecoderConfig",
    "DEFAULT_SR",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TONE_FREQ",
    "DEFAULT_DETECTOR_WINDOW",
    "DEFAULT_UNIT_GROUP",
    "UNCLASSIFIABLE",
]
