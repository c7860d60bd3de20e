# reverse_ai/services/pipelines/base.py
import asyncio
import time
from abc import ABC, abstractmethod
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict

from reverse_ai.data.constants import Mode
from reverse_ai.services import local_file_logger
from reverse_ai.services.clients.base import TransformClient
from reverse_ai.services.errors import GENERIC_FAILURE_MESSAGE, TIMEOUT_MESSAGE, TransformError
from reverse_ai.services.slots import Slot, SlotState

logger = structlog.get_logger(__name__)


class TransformRequest(BaseModel):
    """One (image, prompt) pair bound to the slot generation it was issued for."""
    model_config = ConfigDict(frozen=True)

    slot_index: int
    ticket: int
    source_image: str
    prompt: str


class PipelineState(BaseModel):
    mode: Mode
    busy: bool
    slots: list[SlotState]


class BasePipeline(ABC):
    """Owns one or more slots and drives their requests through a TransformClient."""

    mode: Mode

    def __init__(
        self,
        client: TransformClient,
        *,
        log: structlog.typing.FilteringBoundLogger | None = None,
        request_timeout: float | None = None,
        archive_dir: Path | None = None,
    ) -> None:
        self.client = client
        self.log = (log or logger).bind(mode=self.mode.value)
        self.request_timeout = request_timeout
        self.archive_dir = archive_dir

    @property
    @abstractmethod
    def slots(self) -> tuple[Slot, ...]:
        raise NotImplementedError

    @abstractmethod
    def render_prompt(self, slot: Slot) -> str:
        """Renders the prompt for a slot from its current parameter."""
        raise NotImplementedError

    @property
    def is_busy(self) -> bool:
        return any(slot.is_loading for slot in self.slots)

    def _issue(self, slot: Slot, ticket: int) -> TransformRequest:
        request = TransformRequest(
            slot_index=slot.index,
            ticket=ticket,
            source_image=slot.source_image,
            prompt=self.render_prompt(slot),
        )
        self.log.info(
            "Request issued",
            slot=slot.index,
            ticket=ticket,
            prompt=request.prompt,
        )
        return request

    def _issue_begin(self, slot: Slot, image: str) -> TransformRequest:
        return self._issue(slot, slot.begin(image))

    def _issue_retry(self, slot: Slot) -> TransformRequest:
        return self._issue(slot, slot.retry())

    async def _call_client(self, request: TransformRequest) -> str:
        call = self.client.transform(request.source_image, request.prompt)
        if self.request_timeout:
            return await asyncio.wait_for(call, timeout=self.request_timeout)
        return await call

    async def _dispatch(self, slot: Slot, request: TransformRequest) -> None:
        """
        Awaits the client and routes the outcome to the slot.

        The outcome is dropped if the slot was reset or torn down meanwhile.
        Never raises for transformation failures; they become the slot's error.
        """
        log = self.log.bind(slot=request.slot_index, ticket=request.ticket)
        start_time = time.monotonic()
        error_message: str | None = None
        result: str | None = None

        try:
            result = await self._call_client(request)
        except TransformError as e:
            log.warning("Transformation failed", error_type=type(e).__name__, error=str(e))
            error_message = e.user_message
        except asyncio.TimeoutError:
            log.warning("Transformation timed out", timeout=self.request_timeout)
            error_message = TIMEOUT_MESSAGE
        except Exception:
            log.exception("An unexpected error occurred during transformation")
            error_message = GENERIC_FAILURE_MESSAGE

        elapsed_ms = int((time.monotonic() - start_time) * 1000)

        if error_message is not None:
            if not slot.fail(error_message, ticket=request.ticket):
                log.info("Dropping stale failure", current_generation=slot.generation)
            return

        if not slot.complete(result, ticket=request.ticket):
            log.info("Dropping stale response", current_generation=slot.generation)
            return

        log.info("Transformation successful", generation_time_ms=elapsed_ms)

        if self.archive_dir is not None:
            await local_file_logger.log_generation_to_disk(
                prompt=request.prompt,
                mode=self.mode.value,
                slot_index=request.slot_index,
                source_image=request.source_image,
                result_image=result,
                base_dir=self.archive_dir,
                params={"parameter": slot.parameter, "generation_time_ms": elapsed_ms},
            )

    def teardown(self) -> None:
        """Resets every owned slot; anything still in flight becomes stale."""
        for slot in self.slots:
            slot.reset()
        self.log.debug("Pipeline torn down")

    def snapshot(self) -> PipelineState:
        return PipelineState(
            mode=self.mode,
            busy=self.is_busy,
            slots=[slot.snapshot() for slot in self.slots],
        )
