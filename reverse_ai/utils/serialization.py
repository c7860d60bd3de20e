# reverse_ai/utils/serialization.py
from typing import Any, Callable

import orjson


def orjson_dumps(v: Any, *, default: Callable[[Any], Any] | None = None) -> str:
    # orjson.dumps returns bytes; structlog and aiohttp want str
    return orjson.dumps(v, default=default).decode()
