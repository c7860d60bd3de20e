# reverse_ai/services/pipelines/dual_slot.py
import asyncio
from typing import Any, Coroutine, Sequence

from reverse_ai.data.constants import DUAL_SLOT_COUNT, Mode, SlotStatus
from reverse_ai.data.settings import settings
from reverse_ai.services.clients.base import TransformClient
from reverse_ai.services.prompting import build_prompt
from reverse_ai.services.slots import Slot

from .base import BasePipeline


class DualSlotOrchestrator(BasePipeline):
    """
    Drives the two independent slots of COUNTRY mode.

    Each slot carries its own country and its own lifecycle. Slots share no
    mutable state, so a request, failure or reset on one index never touches
    the other.
    """

    mode = Mode.COUNTRY

    def __init__(
        self,
        client: TransformClient,
        countries: Sequence[str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(client, **kwargs)
        countries = tuple(countries or settings.defaults.countries)
        if len(countries) != DUAL_SLOT_COUNT:
            raise ValueError(f"Expected {DUAL_SLOT_COUNT} countries, got {len(countries)}")
        self._slots = tuple(
            Slot(index=i, parameter=country, freeze_parameter=False)
            for i, country in enumerate(countries)
        )

    @property
    def slots(self) -> tuple[Slot, ...]:
        return self._slots

    def slot(self, index: int) -> Slot:
        if not 0 <= index < DUAL_SLOT_COUNT:
            raise IndexError(f"Slot index out of range: {index}")
        return self._slots[index]

    def render_prompt(self, slot: Slot) -> str:
        return build_prompt(Mode.COUNTRY, slot.parameter)

    def set_country(self, index: int, country: str) -> bool:
        slot = self.slot(index)
        if not slot.can_edit_parameter:
            self.log.info("Country change rejected", slot=index, status=slot.status.value)
            return False
        slot.set_parameter(country)
        return True

    def attach_image(self, index: int, image: str) -> bool:
        slot = self.slot(index)
        if slot.status is not SlotStatus.IDLE or not image:
            self.log.info("Image attach rejected", slot=index, status=slot.status.value)
            return False
        slot.attach(image)
        return True

    def remove_image(self, index: int) -> bool:
        slot = self.slot(index)
        if slot.status is not SlotStatus.IDLE:
            return False
        slot.reset()
        return True

    def issue_generate(self, index: int) -> Coroutine[Any, Any, None] | None:
        """
        Moves slot `index` into LOADING and returns the coroutine that awaits
        its single request.

        Returns:
            None (no-op) if the slot has no image or is already loading.
        """
        slot = self.slot(index)
        if not slot.source_image or slot.is_loading:
            self.log.info("Generate skipped", slot=index, status=slot.status.value)
            return None
        if slot.status is SlotStatus.IDLE:
            request = self._issue_begin(slot, slot.source_image)
        else:
            request = self._issue_retry(slot)
        return self._dispatch(slot, request)

    def issue_generate_all(self) -> dict[int, Coroutine[Any, Any, None]]:
        """Issues every slot that qualifies, each on its own criteria."""
        runs = {}
        for index in range(DUAL_SLOT_COUNT):
            run = self.issue_generate(index)
            if run is not None:
                runs[index] = run
        self.log.info("Generate all", issued=list(runs))
        return runs

    def issue_retry(self, index: int) -> Coroutine[Any, Any, None] | None:
        if self.slot(index).status not in (SlotStatus.SUCCESS, SlotStatus.ERROR):
            return None
        return self.issue_generate(index)

    async def generate_one(self, index: int) -> bool:
        run = self.issue_generate(index)
        if run is None:
            return False
        await run
        return True

    async def generate_all(self) -> list[bool]:
        """
        Both requests are issued before either is awaited, and each one
        completes on its own.
        """
        runs = self.issue_generate_all()
        await asyncio.gather(*runs.values())
        return [index in runs for index in range(DUAL_SLOT_COUNT)]

    async def retry(self, index: int) -> bool:
        run = self.issue_retry(index)
        if run is None:
            return False
        await run
        return True

    def reset(self, index: int) -> None:
        self.slot(index).reset()

    def clear_result(self, index: int) -> bool:
        slot = self.slot(index)
        if slot.status not in (SlotStatus.SUCCESS, SlotStatus.ERROR):
            return False
        slot.clear_result()
        return True
