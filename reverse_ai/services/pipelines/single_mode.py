# reverse_ai/services/pipelines/single_mode.py
from typing import Any, Coroutine

from reverse_ai.data.constants import SINGLE_MODES, Mode, SlotStatus
from reverse_ai.services.clients.base import TransformClient
from reverse_ai.services.prompting import build_prompt
from reverse_ai.services.slots import Slot

from .base import BasePipeline


class SingleModePipeline(BasePipeline):
    """Drives the single slot of the REVERSE, AGE and STYLE modes."""

    def __init__(
        self,
        mode: Mode,
        client: TransformClient,
        parameter: Any = None,
        **kwargs: Any,
    ) -> None:
        if mode not in SINGLE_MODES:
            raise ValueError(f"{mode.value} is not a single-slot mode")
        self.mode = mode
        super().__init__(client, **kwargs)
        self._slot = Slot(index=0, parameter=parameter, freeze_parameter=True)

    @property
    def slot(self) -> Slot:
        return self._slot

    @property
    def slots(self) -> tuple[Slot, ...]:
        return (self._slot,)

    @property
    def parameter(self) -> Any:
        return self._slot.parameter

    def render_prompt(self, slot: Slot) -> str:
        return build_prompt(self.mode, slot.parameter)

    def set_parameter(self, value: Any) -> bool:
        """Edits the age/style value. Only accepted before an image is submitted."""
        if not self._slot.can_edit_parameter:
            self.log.info("Parameter edit rejected", status=self._slot.status.value)
            return False
        self._slot.set_parameter(value)
        return True

    def issue_submit(self, image: str) -> Coroutine[Any, Any, None] | None:
        """
        Moves the slot into LOADING for a freshly supplied image.

        Returns:
            The coroutine that awaits the client and routes the outcome, or
            None if the submission was rejected (no image or slot not idle).
        """
        if not image:
            self.log.warning("Submit rejected: no source image")
            return None
        if self._slot.status is not SlotStatus.IDLE:
            self.log.info("Submit rejected", status=self._slot.status.value)
            return None
        return self._dispatch(self._slot, self._issue_begin(self._slot, image))

    def issue_retry(self) -> Coroutine[Any, Any, None] | None:
        """Re-enters LOADING with the stored source image and the current parameter."""
        if self._slot.status not in (SlotStatus.SUCCESS, SlotStatus.ERROR) or not self._slot.source_image:
            self.log.info("Retry rejected", status=self._slot.status.value)
            return None
        return self._dispatch(self._slot, self._issue_retry(self._slot))

    async def submit(self, image: str) -> bool:
        """Returns True once an issued request has been routed, False if rejected."""
        run = self.issue_submit(image)
        if run is None:
            return False
        await run
        return True

    async def retry_submit(self) -> bool:
        run = self.issue_retry()
        if run is None:
            return False
        await run
        return True

    def reset_submit(self) -> None:
        self._slot.reset()
