"""Sequence model constants."""

SEQUENCE_VERSION = 1

DEFAULT_PROMPT = "$ "

DEFAULT_SPEED = 1.0
DEFAULT_BEGIN_DELAY = 0.0  # seconds
DEFAULT_END_DELAY = 1.0  # seconds
DEFAULT_DELAY_TYPE_START = 750  # milliseconds
DEFAULT_DELAY_TYPE_CHAR = 35  # milliseconds
DEFAULT_DELAY_TYPE_SUBMIT = 350  # milliseconds
DEFAULT_DELAY_OUTPUT_LINE = 500  # milliseconds

MILLISECONDS_IN_A_SECOND = 1000.0
