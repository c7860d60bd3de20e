# reverse_ai/services/__init__.py
from .errors import (
    InvalidMedia,
    InvalidState,
    NoResult,
    ProviderRefused,
    TransformError,
    TransportFailure,
)
from .mode_controller import ModeController
from .slots import Slot, SlotState

__all__ = [
    "InvalidMedia",
    "InvalidState",
    "ModeController",
    "NoResult",
    "ProviderRefused",
    "Slot",
    "SlotState",
    "TransformError",
    "TransportFailure",
]
