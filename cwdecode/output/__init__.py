"""Output layer - Token presentation.

This layer renders decoded tokens:
- Plain text symbols (. _ and boundary markers)
"""

from .text import TokenRenderer, DEFAULT_SYMBOLS

__all__ = [
    "TokenRenderer",
    "DEFAULT_SYMBOLS",
]
