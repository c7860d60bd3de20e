# reverse_ai/services/clients/base.py
from typing import Protocol, runtime_checkable


@runtime_checkable
class TransformClient(Protocol):
    async def transform(self, image: str, prompt: str) -> str:
        """
        Sends one image and one instruction to the generation capability.

        Args:
            image: Encoded source image, with or without a data URI header.
            prompt: Rendered instruction text.

        Returns:
            The generated image as a data URI.

        Raises:
            ProviderRefused, NoResult, TransportFailure.
        """
        ...
