"""Analysis layer - Low-level signal analysis.

This layer turns raw audio into binary decisions:
- Chunk energy (RMS deviation)
- Windowed tone/silence quantization
"""

from .tone import ToneDetector, compute_energy, discriminator, quantize

__all__ = [
    "ToneDetector",
    "compute_energy",
    "discriminator",
    "quantize",
]
