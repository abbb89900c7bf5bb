"""All magic numbers and configuration defaults."""

DEFAULT_VOICE = "alloy"                  # nova, alloy, echo, fable, onyx, shimmer
DEFAULT_SPEED = 1.0                      # speech speed multiplier
MIN_SPEED = 0.25
MAX_SPEED = 4.0
DEFAULT_MODEL = "gpt-4o-mini-tts"        # tts-1-hd for higher quality
DEFAULT_CHUNK_SIZE = 400                 # chars per chunk (splitter target)
CHUNK_SEPARATORS = ["\n\n", "\n", "。", "、", ".", ",", " ", ""]
DEFAULT_PARALLEL = 3                     # concurrent synthesis requests
TARGET_INTEGRATED_LOUDNESS = -16.0       # LUFS
TARGET_TRUE_PEAK = -1.5                  # dBTP
TARGET_LOUDNESS_RANGE = 11.0             # LU
PADDING_SECONDS = 1.0                    # silence before and after the speech
AUDIO_FORMAT = "mp3"                     # response format and chunk file extension
OUTPUT_CODEC = "libmp3lame"
WORK_DIR_PREFIX = "tts-work-"
DEBUG_DIR_PREFIX = "tts-debug-"
COMBINED_FILENAME = "combined_temp.mp3"
SILENCE_FILENAME = "silence_padding.mp3"
VERSION = "0.1.0"
