# reverse_ai/services/slots.py
"""
Slot: the state container for one image's transformation attempt.

    IDLE --begin--> LOADING --complete--> SUCCESS
                            --fail------> ERROR
    SUCCESS/ERROR --retry--> LOADING
    any --reset--> IDLE (source image dropped)
    SUCCESS/ERROR --clear_result--> IDLE (source image kept)

Every entry into LOADING hands out a ticket (the slot generation). A response
is applied only if it carries the current ticket; reset() moves the
generation on, so whatever was in flight at that moment becomes stale.
"""
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from reverse_ai.data.constants import SlotStatus
from reverse_ai.services.errors import InvalidState

logger = structlog.get_logger(__name__)


class SlotState(BaseModel):
    """Read-only view of a slot, safe to hand to the outer surface."""
    model_config = ConfigDict(frozen=True)

    index: int
    status: SlotStatus
    parameter: Any = None
    has_source_image: bool
    has_result: bool
    error_message: str | None = None


class Slot:
    def __init__(
        self,
        index: int = 0,
        parameter: Any = None,
        *,
        freeze_parameter: bool = True,
    ) -> None:
        """
        Args:
            index: Position of the slot inside its owner.
            parameter: Mode-specific value (age, style text, country).
            freeze_parameter: When True the parameter can only be edited while
                IDLE; otherwise it can be edited in any state except LOADING.
        """
        self.index = index
        self.freeze_parameter = freeze_parameter
        self._parameter = parameter
        self._status = SlotStatus.IDLE
        self._source_image: str | None = None
        self._result: str | None = None
        self._error_message: str | None = None
        self._generation = 0

    def __repr__(self) -> str:
        return f"Slot(index={self.index}, status={self._status.value}, generation={self._generation})"

    @property
    def status(self) -> SlotStatus:
        return self._status

    @property
    def parameter(self) -> Any:
        return self._parameter

    @property
    def source_image(self) -> str | None:
        return self._source_image

    @property
    def result(self) -> str | None:
        return self._result

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._status is SlotStatus.LOADING

    @property
    def can_edit_parameter(self) -> bool:
        if self.freeze_parameter:
            return self._status is SlotStatus.IDLE
        return self._status is not SlotStatus.LOADING

    def _require(self, *allowed: SlotStatus, action: str) -> None:
        if self._status not in allowed:
            raise InvalidState(
                f"Cannot {action} slot {self.index} while {self._status.value}"
            )

    def _enter_loading(self) -> int:
        self._status = SlotStatus.LOADING
        self._result = None
        self._error_message = None
        self._generation += 1
        return self._generation

    def set_parameter(self, value: Any) -> None:
        if not self.can_edit_parameter:
            raise InvalidState(
                f"Parameter of slot {self.index} is locked while {self._status.value}"
            )
        self._parameter = value

    def attach(self, image: str) -> None:
        """Stores a source image without issuing a request."""
        self._require(SlotStatus.IDLE, action="attach an image to")
        if not image:
            raise InvalidState("Source image must not be empty")
        self._source_image = image

    def begin(self, image: str) -> int:
        self._require(SlotStatus.IDLE, action="begin")
        if not image:
            raise InvalidState("Source image must not be empty")
        self._source_image = image
        return self._enter_loading()

    def retry(self) -> int:
        self._require(SlotStatus.SUCCESS, SlotStatus.ERROR, action="retry")
        if not self._source_image:
            raise InvalidState(f"Slot {self.index} has no stored source image")
        return self._enter_loading()

    def is_current(self, ticket: int) -> bool:
        return ticket == self._generation and self._status is SlotStatus.LOADING

    def complete(self, image: str, *, ticket: int) -> bool:
        """Applies a result. Returns False when the ticket is stale."""
        if ticket != self._generation:
            return False
        self._require(SlotStatus.LOADING, action="complete")
        self._status = SlotStatus.SUCCESS
        self._result = image
        return True

    def fail(self, message: str, *, ticket: int) -> bool:
        """Applies an error. Returns False when the ticket is stale."""
        if ticket != self._generation:
            return False
        self._require(SlotStatus.LOADING, action="fail")
        self._status = SlotStatus.ERROR
        self._error_message = message
        return True

    def reset(self) -> None:
        if self._status is SlotStatus.LOADING:
            self._generation += 1
            logger.debug("Slot reset while loading; in-flight response is now stale.", slot=self.index)
        self._status = SlotStatus.IDLE
        self._source_image = None
        self._result = None
        self._error_message = None

    def clear_result(self) -> None:
        """Drops the outcome of the last attempt but keeps the source image."""
        self._require(SlotStatus.SUCCESS, SlotStatus.ERROR, action="clear the result of")
        self._status = SlotStatus.IDLE
        self._result = None
        self._error_message = None

    def snapshot(self) -> SlotState:
        return SlotState(
            index=self.index,
            status=self._status,
            parameter=self._parameter,
            has_source_image=self._source_image is not None,
            has_result=self._result is not None,
            error_message=self._error_message,
        )
