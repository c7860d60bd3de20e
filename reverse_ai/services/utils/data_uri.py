# reverse_ai/services/utils/data_uri.py
import base64
import binascii
import re

_HEADER_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,")


def strip_data_uri_header(encoded: str) -> str:
    """Returns only the base64 payload of a data URI (or the input if it has no header)."""
    return _HEADER_RE.sub("", encoded, count=1)


def split_data_uri(encoded: str) -> tuple[str | None, str]:
    """Splits 'data:<mime>;base64,<payload>' into (mime, payload); mime is None without a header."""
    match = _HEADER_RE.match(encoded)
    if not match:
        return None, encoded
    return match.group("mime").lower(), encoded[match.end():]


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(encoded: str) -> tuple[str | None, bytes]:
    """
    Decodes a data URI (or bare base64 string) into (mime, raw bytes).

    Raises:
        ValueError: If the payload is not valid base64.
    """
    mime, payload = split_data_uri(encoded)
    try:
        return mime, base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Image payload is not valid base64") from e


def ext_from_content_type(ct: str | None) -> str:
    """Determines a file extension from a MIME type string."""
    if not ct:
        return "bin"
    ct = ct.lower().split(";")[0].strip()
    return {
        "image/png": "png",
        "image/jpeg": "jpg",
        "image/jpg": "jpg",
        "image/webp": "webp",
        "image/gif": "gif",
        "image/bmp": "bmp",
        "image/tiff": "tiff",
    }.get(ct, "bin")
