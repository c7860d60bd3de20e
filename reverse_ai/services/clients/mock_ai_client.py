# reverse_ai/services/clients/mock_ai_client.py
from __future__ import annotations

import asyncio
import io

import structlog
from PIL import Image, ImageOps, UnidentifiedImageError

from reverse_ai.data.constants import OUTPUT_MIME_TYPE
from reverse_ai.data.settings import settings
from reverse_ai.services.utils import decode_data_uri, to_data_uri

logger = structlog.get_logger(__name__)


def _render_placeholder(color: str = "gray") -> bytes:
    img = Image.new("RGB", (1024, 1024), color)
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()


def _render_grayscale(image_bytes: bytes) -> bytes:
    with Image.open(io.BytesIO(image_bytes)) as src:
        img = ImageOps.grayscale(src).convert("RGB")
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=90)
    return buffer.getvalue()


class MockAIClient:
    """Offline TransformClient returning a grayscale copy of the input."""

    def __init__(self, *, delay: float | None = None) -> None:
        self.delay = settings.transform.mock_delay if delay is None else delay

    async def transform(self, image: str, prompt: str) -> str:
        logger.info("MOCK Transform: simulating image generation...", prompt=prompt[:80])
        await asyncio.sleep(self.delay)

        try:
            _, image_bytes = decode_data_uri(image)
            output = _render_grayscale(image_bytes)
        except (ValueError, UnidentifiedImageError, OSError):
            logger.warning("MOCK Transform: could not decode input, using placeholder.")
            output = _render_placeholder()

        return to_data_uri(output, OUTPUT_MIME_TYPE)
