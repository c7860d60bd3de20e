# reverse_ai/services/image_intake.py
import mimetypes

import structlog

from reverse_ai.services.errors import InvalidMedia
from reverse_ai.services.utils import to_data_uri

logger = structlog.get_logger(__name__)


def read_image(
    data: bytes,
    *,
    filename: str | None = None,
    content_type: str | None = None,
) -> str:
    """
    Turns an uploaded file into a self-describing encoded image.

    The declared content type wins; the filename is only used when nothing is
    declared.

    Returns:
        A data URI of the form 'data:<mime>;base64,<payload>'.

    Raises:
        InvalidMedia: If the file does not declare an image type or is empty.
    """
    mime = (content_type or "").split(";")[0].strip().lower()
    if not mime or mime == "application/octet-stream":
        guessed, _ = mimetypes.guess_type(filename or "")
        mime = (guessed or mime).lower()

    if not mime.startswith("image/"):
        logger.info("Upload rejected: not an image", filename=filename, content_type=content_type)
        raise InvalidMedia()
    if not data:
        logger.info("Upload rejected: empty file", filename=filename)
        raise InvalidMedia("The uploaded image is empty")

    return to_data_uri(data, mime)
