# reverse_ai/services/image_export.py
import threading
import time

from pydantic import BaseModel

from reverse_ai.data.constants import Mode
from reverse_ai.services.utils import decode_data_uri, ext_from_content_type

_stamp_lock = threading.Lock()
_last_stamp = 0


class ExportArtifact(BaseModel):
    filename: str
    content_type: str
    data: bytes


def _next_stamp() -> int:
    """Epoch milliseconds, strictly increasing within the process."""
    global _last_stamp
    with _stamp_lock:
        stamp = max(int(time.time() * 1000), _last_stamp + 1)
        _last_stamp = stamp
    return stamp


def export_filename(mode: Mode, index: int, ext: str) -> str:
    stamp = _next_stamp()
    if mode is Mode.COUNTRY:
        return f"country-transform-{index + 1}-{stamp}.{ext}"
    return f"reverse-ai-{stamp}.{ext}"


def build_export(image: str, *, mode: Mode, index: int = 0) -> ExportArtifact:
    """
    Produces a downloadable file for a result image.

    Raises:
        ValueError: If the image is not a decodable data URI.
    """
    mime, data = decode_data_uri(image)
    content_type = mime or "application/octet-stream"
    return ExportArtifact(
        filename=export_filename(mode, index, ext_from_content_type(content_type)),
        content_type=content_type,
        data=data,
    )
