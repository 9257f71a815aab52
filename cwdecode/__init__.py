"""cwdecode - Streaming Morse code (CW) audio decoder.

Architecture Layers:
    1. input/       - Sample sources (audio files, synthetic keyed tones)
    2. analysis/    - Tone detection (chunk energy, windowed threshold)
    3. processing/  - Timing (run-length rhythm, unit normalization)
    4. inference/   - Token classification (tone/silence state machine)
    5. output/      - Text rendering
    pipeline        - Stage composition (iterator chain or threads)
"""

__version__ = "0.1.0"

# Core types
from .core import Token, Run, DecoderConfig

# Input layer
from .input import AudioLoader, MorseSynthesizer, chunk_samples

# Analysis layer
from .analysis import ToneDetector, compute_energy

# Processing layer
from .processing import RhythmEncoder, UnitNormalizer, estimate_unit

# Inference layer
from .inference import TokenClassifier, ClassifierState

# Output layer
from .output import TokenRenderer

# Pipeline
from .pipeline import DecoderPipeline, PipelineStats, decode

__all__ = [
    # Core
    "Token",
    "Run",
    "DecoderConfig",
    # Input
    "AudioLoader",
    "MorseSynthesizer",
    "chunk_samples",
    # Analysis
    "ToneDetector",
    "compute_energy",
    # Processing
    "RhythmEncoder",
    "UnitNormalizer",
    "estimate_unit",
    # Inference
    "TokenClassifier",
    "ClassifierState",
    # Output
    "TokenRenderer",
    # Pipeline
    "DecoderPipeline",
    "PipelineStats",
    "decode",
]
