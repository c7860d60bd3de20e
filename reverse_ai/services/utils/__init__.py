from .data_uri import (
    decode_data_uri,
    ext_from_content_type,
    split_data_uri,
    strip_data_uri_header,
    to_data_uri,
)

__all__ = [
    "decode_data_uri",
    "ext_from_content_type",
    "split_data_uri",
    "strip_data_uri_header",
    "to_data_uri",
]
