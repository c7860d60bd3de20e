# reverse_ai/app.py
import aiojobs
import structlog
from aiohttp import web

from reverse_ai import utils
from reverse_ai.data.settings import settings
from reverse_ai.middlewares import struct_logging_middleware
from reverse_ai.services.clients import TransformClient, get_transform_client
from reverse_ai.services.mode_controller import ModeController
from reverse_ai.web_handlers import routes


async def aiohttp_on_startup(app: web.Application) -> None:
    app["scheduler"] = aiojobs.Scheduler(pending_limit=settings.web.max_pending_jobs)
    app["logger"].info("Started job scheduler")


async def aiohttp_on_cleanup(app: web.Application) -> None:
    if "scheduler" in app:
        app["logger"].debug("Stopping job scheduler")
        await app["scheduler"].close()
        app["logger"].info("Stopped job scheduler")


def create_app(
    client: TransformClient | None = None,
    *,
    logger: structlog.typing.FilteringBoundLogger | None = None,
) -> web.Application:
    """
    Builds the HTTP application around a single ModeController.

    Args:
        client: TransformClient to use; defaults to the one named in settings.
        logger: Bound logger for request and business logs.
    """
    logger = logger or structlog.get_logger("reverse_ai.main")
    app = web.Application(
        client_max_size=settings.web.max_upload_mb * 1024 * 1024,
        middlewares=[struct_logging_middleware(logger.bind(type="http"))],
    )
    client = client or get_transform_client(settings.transform.client)

    app["logger"] = logger
    app["controller"] = ModeController.from_settings(client)
    app.add_routes(routes)
    app.on_startup.append(aiohttp_on_startup)
    app.on_cleanup.append(aiohttp_on_cleanup)
    return app


def main() -> None:
    logger = utils.logging.setup_logger()
    app = create_app(logger=logger.bind(type="business"))
    logger.info(
        "Starting HTTP server",
        host=settings.web.listening_host,
        port=settings.web.listening_port,
        client=settings.transform.client,
    )
    web.run_app(
        app,
        handle_signals=True,
        host=settings.web.listening_host,
        port=settings.web.listening_port,
        print=None,
    )


if __name__ == "__main__":
    main()
