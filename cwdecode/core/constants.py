"""Global constants for cwdecode."""

# Audio defaults
DEFAULT_SR = 8000
DEFAULT_CHUNK_SIZE = 64  # samples per energy estimate
DEFAULT_TONE_FREQ = 500.0
PCM_SCALE = 32767  # float [-1, 1] -> signed 16-bit

# Windowing defaults
DEFAULT_DETECTOR_WINDOW = 100  # amplitudes per discriminator
DEFAULT_UNIT_GROUP = 20  # runs per unit estimate (~10 tones + 10 silences)
DEFAULT_QUEUE_SIZE = 1

# Canonical Morse durations, in units
DIT_UNITS = 1
DAH_UNITS = 3
INTRA_GAP_UNITS = 1
LETTER_GAP_UNITS = 3
WORD_GAP_UNITS = 7
PAUSE_UNITS = 10
UNCLASSIFIABLE = 0

# Ratio band upper limits (inclusive)
SHORT_BAND_MAX = 2.0
LETTER_BAND_MAX = 5.0
WORD_BAND_MAX = 8.0
