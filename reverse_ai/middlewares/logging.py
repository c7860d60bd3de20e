# reverse_ai/middlewares/logging.py
import time
from typing import Awaitable, Callable

import structlog
from aiohttp import web

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def struct_logging_middleware(logger: structlog.typing.FilteringBoundLogger):
    """Logs every HTTP request with its outcome and duration."""

    @web.middleware
    async def middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        log = logger.bind(method=request.method, path=request.path)
        start_time = time.monotonic()
        try:
            response = await handler(request)
        except web.HTTPException as e:
            log.info(
                "HTTP request",
                status=e.status,
                reason=e.reason,
                duration_ms=int((time.monotonic() - start_time) * 1000),
            )
            raise
        except Exception:
            log.exception("Unhandled error while processing HTTP request")
            raise
        log.info(
            "HTTP request",
            status=response.status,
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        return response

    return middleware
