# reverse_ai/services/clients/google_ai_client.py
from __future__ import annotations

import json
from typing import Any, List

import structlog
from google import genai
from google.genai import types
from google.genai.types import Modality
from google.oauth2.service_account import Credentials

from reverse_ai.data.constants import DEFAULT_INPUT_MIME_TYPE, OUTPUT_MIME_TYPE
from reverse_ai.data.settings import settings
from reverse_ai.services.errors import NoResult, ProviderRefused, TransportFailure
from reverse_ai.services.utils import decode_data_uri, to_data_uri

logger = structlog.get_logger(__name__)


def _part_kinds(parts: List[Any]) -> list[str]:
    return [
        "inline_data" if getattr(p, "inline_data", None)
        else "text" if getattr(p, "text", None)
        else "other"
        for p in parts
    ]


def _pick_best_inline_image(parts: List[Any]) -> bytes | None:
    """Return the largest inline image payload from parts."""
    best: bytes | None = None
    for p in parts or []:
        inline = getattr(p, "inline_data", None)
        data = getattr(inline, "data", None) if inline else None
        if data and (best is None or len(data) > len(best)):
            best = data
    return best


def _collect_text(parts: List[Any]) -> str:
    texts = [p.text.strip() for p in parts or [] if getattr(p, "text", None)]
    return " ".join(t for t in texts if t)


def _build_genai_client() -> genai.Client:
    google = settings.google
    if google.project_id:
        if not google.service_account_creds_json:
            raise RuntimeError(
                "Missing Vertex AI credentials. Set GOOGLE__SERVICE_ACCOUNT_CREDS_JSON."
            )
        creds_info = json.loads(google.service_account_creds_json.get_secret_value())
        scoped_creds = Credentials.from_service_account_info(creds_info).with_scopes(
            ["https://www.googleapis.com/auth/cloud-platform"]
        )
        return genai.Client(
            vertexai=True,
            project=google.project_id,
            location=google.location,
            credentials=scoped_creds,
        )
    if google.api_key:
        return genai.Client(api_key=google.api_key.get_secret_value())
    raise RuntimeError(
        "Missing Google configuration. "
        "Set GOOGLE__API_KEY, or GOOGLE__PROJECT_ID with GOOGLE__SERVICE_ACCOUNT_CREDS_JSON."
    )


class GoogleGeminiClient:
    """
    TransformClient backed by Gemini image models through google-genai.

    Notes:
      - Uses the async surface client.aio.models.generate_content.
      - The output is always declared as image/jpeg, whatever the input format.
    """

    def __init__(
        self,
        *,
        model: str | None = None,
        genai_client: Any | None = None,
    ) -> None:
        self.model = model or settings.transform.model
        if genai_client is not None:
            self._client = genai_client
            return
        try:
            self._client = _build_genai_client()
            logger.info("GenAI client initialized.", model=self.model)
        except Exception:
            logger.exception("Failed to initialize Google Gen AI client.")
            raise

    async def transform(self, image: str, prompt: str) -> str:
        log = logger.bind(model=self.model)

        try:
            mime, image_bytes = decode_data_uri(image)
        except ValueError as e:
            raise TransportFailure(str(e)) from e

        parts: List[Any] = [
            prompt,
            types.Part.from_bytes(data=image_bytes, mime_type=mime or DEFAULT_INPUT_MIME_TYPE),
        ]
        gen_config = types.GenerateContentConfig(
            response_modalities=[Modality.TEXT, Modality.IMAGE],
        )

        log.info("Calling Gemini for image transformation.", input_bytes=len(image_bytes))
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=parts,
                config=gen_config,
            )
        except Exception as e:
            log.error("Gemini API error during image transformation", error=str(e))
            raise TransportFailure(str(e) or e.__class__.__name__) from e

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            feedback = getattr(response, "prompt_feedback", None)
            log.error(
                "Empty response from Gemini.",
                block_reason=str(getattr(feedback, "block_reason", None)),
            )
            raise NoResult("No candidates in response.")

        candidate = candidates[0]
        content = getattr(candidate, "content", None)
        response_parts = getattr(content, "parts", None) or []

        picked = _pick_best_inline_image(response_parts)
        if picked:
            return to_data_uri(picked, OUTPUT_MIME_TYPE)

        text = _collect_text(response_parts)
        if text:
            log.warning("Model returned text instead of image.", text=text)
            raise ProviderRefused(text)

        log.error(
            "No inline image in response.",
            reason=str(getattr(candidate, "finish_reason", "UNKNOWN")),
            part_kinds=_part_kinds(response_parts),
        )
        raise NoResult("No image generated.")
