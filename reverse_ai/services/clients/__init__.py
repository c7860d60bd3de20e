# reverse_ai/services/clients/__init__.py
from .base import TransformClient
from .factory import get_transform_client

__all__ = [
    "TransformClient",
    "get_transform_client",
]
