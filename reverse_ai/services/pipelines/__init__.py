from .base import BasePipeline, PipelineState, TransformRequest
from .dual_slot import DualSlotOrchestrator
from .single_mode import SingleModePipeline

__all__ = [
    "BasePipeline",
    "DualSlotOrchestrator",
    "PipelineState",
    "SingleModePipeline",
    "TransformRequest",
]
