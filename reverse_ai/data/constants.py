# reverse_ai/data/constants.py
from enum import Enum


class Mode(str, Enum):
    """Transformation kinds offered to the user."""
    REVERSE = "REVERSE"
    AGE = "AGE"
    STYLE = "STYLE"
    COUNTRY = "COUNTRY"


class SlotStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


SINGLE_MODES = (Mode.REVERSE, Mode.AGE, Mode.STYLE)

# Bounds of the age slider; the prompt itself accepts any integer.
MIN_AGE = 5
MAX_AGE = 100

DUAL_SLOT_COUNT = 2

# Every generated image is declared with this type, whatever the input was.
OUTPUT_MIME_TYPE = "image/jpeg"
DEFAULT_INPUT_MIME_TYPE = "image/jpeg"
