# reverse_ai/services/errors.py
"""
Error taxonomy of the transformation core.

TransformError subclasses are raised by TransformClient implementations and
end up as a slot's error message. InvalidMedia is raised at intake time and
never reaches a slot. InvalidState marks a broken slot transition contract.
"""

GENERIC_FAILURE_MESSAGE = "Failed to generate image. Please try again."
TIMEOUT_MESSAGE = "Generation timed out. Please try again."


class ReverseAIError(Exception):
    """Base class for all errors raised by reverse_ai."""


class TransformError(ReverseAIError):
    """The remote capability did not produce an image."""

    @property
    def user_message(self) -> str:
        return str(self) or GENERIC_FAILURE_MESSAGE


class ProviderRefused(TransformError):
    """Only descriptive text came back, typically a safety-policy refusal."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)

    @property
    def user_message(self) -> str:
        return (
            "The model declined to generate an image. "
            f"It might have violated safety policies. Model said: {self.detail}"
        )


class NoResult(TransformError):
    """Neither image nor text came back."""

    @property
    def user_message(self) -> str:
        return "No image generated."


class TransportFailure(TransformError):
    """The call itself failed (network, auth, quota...)."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)

    @property
    def user_message(self) -> str:
        return f"Failed to generate image: {self.detail}"


class InvalidMedia(ReverseAIError):
    def __init__(self, message: str = "Please upload an image file") -> None:
        self.message = message
        super().__init__(message)


class InvalidState(ReverseAIError):
    """A slot transition was requested from a state that does not allow it."""
