"""Input layer - Sample sources.

- Audio files (WAV, FLAC, OGG, MP3) via librosa
- Synthetic keyed tones
- Chunking into fixed-size sample blocks
"""

from .loader import AudioLoader, chunk_samples, to_pcm
from .synthetic import MorseSynthesizer, pattern_to_runs, pattern_to_events

__all__ = [
    "AudioLoader",
    "chunk_samples",
    "to_pcm",
    "MorseSynthesizer",
    "pattern_to_runs",
    "pattern_to_events",
]
