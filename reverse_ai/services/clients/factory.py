# reverse_ai/services/clients/factory.py
from __future__ import annotations

from typing import Any

from .base import TransformClient
from .google_ai_client import GoogleGeminiClient
from .mock_ai_client import MockAIClient

_CLIENT_CLASSES: dict[str, type[Any]] = {
    "mock": MockAIClient,
    "google": GoogleGeminiClient,
}


def get_transform_client(client_name: str) -> TransformClient:
    """
    Creates a TransformClient instance for a given client name.
    """
    client_class = _CLIENT_CLASSES.get(client_name.lower())
    if not client_class:
        raise ValueError(f"Unknown client type specified in config: '{client_name}'")
    return client_class()
