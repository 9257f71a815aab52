"""Inference layer - Symbol-level understanding.

This layer interprets normalized timing:
- Tone/silence state machine
- Dit, dah and boundary tokens
"""

from .classifier import TokenClassifier, ClassifierState

__all__ = [
    "TokenClassifier",
    "ClassifierState",
]
