# reverse_ai/services/mode_controller.py
from pathlib import Path
from typing import Any

import structlog

from reverse_ai.data.constants import Mode
from reverse_ai.data.settings import settings
from reverse_ai.services.clients.base import TransformClient
from reverse_ai.services.pipelines import (
    BasePipeline,
    DualSlotOrchestrator,
    PipelineState,
    SingleModePipeline,
)

logger = structlog.get_logger(__name__)


def _default_parameters() -> dict[Mode, Any]:
    return {
        Mode.REVERSE: None,
        Mode.AGE: settings.defaults.age,
        Mode.STYLE: settings.defaults.style,
    }


class ModeController:
    """
    Holds the selected mode and the pipeline that owns its slots.

    Mode changes are refused while any owned slot is loading, so an in-flight
    request can never outlive the pipeline it was issued by.
    """

    def __init__(
        self,
        client: TransformClient,
        *,
        initial_mode: Mode = Mode.REVERSE,
        request_timeout: float | None = None,
        archive_dir: Path | None = None,
        log: structlog.typing.FilteringBoundLogger | None = None,
    ) -> None:
        self.client = client
        self.request_timeout = request_timeout
        self.archive_dir = archive_dir
        self.log = log or logger
        # Single-mode parameters survive mode switches.
        self._parameters = _default_parameters()
        self._mode = initial_mode
        self._pipeline = self._build_pipeline(initial_mode)

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def pipeline(self) -> BasePipeline:
        return self._pipeline

    @property
    def is_busy(self) -> bool:
        return self._pipeline.is_busy

    def _build_pipeline(self, mode: Mode) -> BasePipeline:
        kwargs = {
            "log": self.log,
            "request_timeout": self.request_timeout,
            "archive_dir": self.archive_dir,
        }
        if mode is Mode.COUNTRY:
            return DualSlotOrchestrator(self.client, settings.defaults.countries, **kwargs)
        return SingleModePipeline(mode, self.client, self._parameters[mode], **kwargs)

    def change_mode(self, new_mode: Mode) -> bool:
        """
        Switches to `new_mode`, clearing every owned slot.

        Returns:
            False (no-op) if a slot of the active pipeline is loading.
        """
        if self._pipeline.is_busy:
            self.log.info("Mode change rejected while loading", current=self._mode.value, requested=new_mode.value)
            return False

        if isinstance(self._pipeline, SingleModePipeline):
            self._parameters[self._mode] = self._pipeline.parameter
        self._pipeline.teardown()

        self._mode = new_mode
        self._pipeline = self._build_pipeline(new_mode)
        self.log.info("Mode changed", mode=new_mode.value)
        return True

    def snapshot(self) -> PipelineState:
        return self._pipeline.snapshot()

    @classmethod
    def from_settings(cls, client: TransformClient) -> "ModeController":
        archive_dir = settings.local_logging.base_dir if settings.local_logging.enabled else None
        return cls(
            client,
            request_timeout=settings.transform.request_timeout,
            archive_dir=archive_dir,
        )
