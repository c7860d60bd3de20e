# reverse_ai/web_handlers/api.py
from typing import TYPE_CHECKING, Any

import structlog
from aiohttp import web

from reverse_ai.data.constants import MAX_AGE, MIN_AGE, Mode
from reverse_ai.data.countries import COUNTRIES, search_countries
from reverse_ai.data.settings import settings
from reverse_ai.data.style_presets import STYLE_PRESETS
from reverse_ai.services.errors import InvalidMedia
from reverse_ai.services.image_export import build_export
from reverse_ai.services.image_intake import read_image
from reverse_ai.services.mode_controller import ModeController
from reverse_ai.services.pipelines import DualSlotOrchestrator, SingleModePipeline
from reverse_ai.utils.serialization import orjson_dumps

if TYPE_CHECKING:
    import aiojobs

logger = structlog.get_logger(__name__)


def _json(data: Any, status: int = 200) -> web.Response:
    return web.json_response(data, status=status, dumps=orjson_dumps)


def _controller(req: web.Request) -> ModeController:
    return req.app["controller"]


def _state(req: web.Request, status: int = 200) -> web.Response:
    return _json(_controller(req).snapshot().model_dump(mode="json"), status=status)


def _conflict(req: web.Request, reason: str) -> web.Response:
    payload = _controller(req).snapshot().model_dump(mode="json")
    payload["error"] = reason
    return _json(payload, status=409)


def _single(req: web.Request) -> SingleModePipeline:
    pipeline = _controller(req).pipeline
    if not isinstance(pipeline, SingleModePipeline):
        raise web.HTTPConflict(reason="Active mode is not a single-image mode")
    return pipeline


def _country(req: web.Request) -> DualSlotOrchestrator:
    pipeline = _controller(req).pipeline
    if not isinstance(pipeline, DualSlotOrchestrator):
        raise web.HTTPConflict(reason="Country mode is not active")
    return pipeline


def _slot_index(req: web.Request) -> int:
    try:
        index = int(req.match_info["index"])
    except ValueError:
        raise web.HTTPNotFound(reason="Unknown slot") from None
    if index not in (0, 1):
        raise web.HTTPNotFound(reason="Unknown slot")
    return index


async def _read_json(req: web.Request) -> dict[str, Any]:
    try:
        body = await req.json()
    except ValueError:
        raise web.HTTPBadRequest(reason="Body must be JSON") from None
    if not isinstance(body, dict):
        raise web.HTTPBadRequest(reason="Body must be a JSON object")
    return body


async def _read_upload(req: web.Request) -> str:
    """Reads the multipart 'file' field into an encoded image."""
    if not req.content_type.startswith("multipart/"):
        raise web.HTTPBadRequest(reason="Expected multipart/form-data with a 'file' field")
    form = await req.post()
    field = form.get("file")
    if not isinstance(field, web.FileField):
        raise web.HTTPBadRequest(reason="Missing 'file' field")
    try:
        return read_image(
            field.file.read(),
            filename=field.filename,
            content_type=field.content_type,
        )
    except InvalidMedia as e:
        raise web.HTTPBadRequest(reason=e.message) from e


def _scheduler(req: web.Request) -> "aiojobs.Scheduler":
    """Returns the job scheduler, refusing work it cannot accept."""
    scheduler: aiojobs.Scheduler = req.app["scheduler"]
    if scheduler.closed:
        raise web.HTTPServiceUnavailable(reason="Closed queue")
    if scheduler.pending_count > settings.web.max_pending_jobs:
        raise web.HTTPTooManyRequests
    return scheduler


async def get_state(req: web.Request) -> web.Response:
    return _state(req)


async def get_catalog(req: web.Request) -> web.Response:
    return _json({
        "modes": [m.value for m in Mode],
        "countries": list(COUNTRIES),
        "style_presets": {k: v.model_dump() for k, v in STYLE_PRESETS.items()},
        "age_range": [MIN_AGE, MAX_AGE],
    })


async def list_countries(req: web.Request) -> web.Response:
    return _json(search_countries(req.query.get("q", "")))


async def change_mode(req: web.Request) -> web.Response:
    body = await _read_json(req)
    try:
        mode = Mode(str(body.get("mode", "")).upper())
    except ValueError:
        raise web.HTTPBadRequest(reason="Unknown mode") from None
    if not _controller(req).change_mode(mode):
        return _conflict(req, "A transformation is in progress")
    return _state(req)


def _validate_parameter(mode: Mode, value: Any) -> Any:
    if mode is Mode.AGE:
        if isinstance(value, bool) or not isinstance(value, int) or not MIN_AGE <= value <= MAX_AGE:
            raise web.HTTPBadRequest(reason=f"Age must be an integer between {MIN_AGE} and {MAX_AGE}")
        return value
    if mode is Mode.STYLE:
        if not isinstance(value, str):
            raise web.HTTPBadRequest(reason="Style description must be a string")
        return value
    raise web.HTTPBadRequest(reason=f"{mode.value} mode takes no parameter")


async def set_single_parameter(req: web.Request) -> web.Response:
    pipeline = _single(req)
    body = await _read_json(req)
    value = _validate_parameter(pipeline.mode, body.get("value"))
    if not pipeline.set_parameter(value):
        return _conflict(req, "Parameter is locked once an image is submitted")
    return _state(req)


async def submit_single(req: web.Request) -> web.Response:
    pipeline = _single(req)
    image = await _read_upload(req)
    scheduler = _scheduler(req)
    run = pipeline.issue_submit(image)
    if run is None:
        return _conflict(req, "Slot is not idle")
    await scheduler.spawn(run)
    return _state(req, status=202)


async def retry_single(req: web.Request) -> web.Response:
    pipeline = _single(req)
    scheduler = _scheduler(req)
    run = pipeline.issue_retry()
    if run is None:
        return _conflict(req, "Nothing to retry")
    await scheduler.spawn(run)
    return _state(req, status=202)


async def reset_single(req: web.Request) -> web.Response:
    _single(req).reset_submit()
    return _state(req)


def _export_response(image: str | None, *, mode: Mode, index: int) -> web.Response:
    if not image:
        raise web.HTTPNotFound(reason="No result to export")
    try:
        artifact = build_export(image, mode=mode, index=index)
    except ValueError as e:
        logger.exception("Could not decode result image for export", mode=mode.value, slot=index)
        raise web.HTTPInternalServerError(reason="Result image is corrupted") from e
    return web.Response(
        body=artifact.data,
        content_type=artifact.content_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


async def export_single(req: web.Request) -> web.Response:
    pipeline = _single(req)
    return _export_response(pipeline.slot.result, mode=pipeline.mode, index=0)


async def set_country(req: web.Request) -> web.Response:
    pipeline = _country(req)
    index = _slot_index(req)
    body = await _read_json(req)
    country = body.get("country")
    if country not in COUNTRIES:
        raise web.HTTPBadRequest(reason="Unknown country")
    if not pipeline.set_country(index, country):
        return _conflict(req, "Slot is loading")
    return _state(req)


async def attach_country_image(req: web.Request) -> web.Response:
    pipeline = _country(req)
    index = _slot_index(req)
    image = await _read_upload(req)
    if not pipeline.attach_image(index, image):
        return _conflict(req, "Slot is not idle")
    return _state(req)


async def remove_country_image(req: web.Request) -> web.Response:
    pipeline = _country(req)
    if not pipeline.remove_image(_slot_index(req)):
        return _conflict(req, "Slot is not idle")
    return _state(req)


async def generate_country(req: web.Request) -> web.Response:
    pipeline = _country(req)
    index = _slot_index(req)
    scheduler = _scheduler(req)
    run = pipeline.issue_generate(index)
    if run is None:
        return _conflict(req, "Slot has no image or is loading")
    await scheduler.spawn(run)
    return _state(req, status=202)


async def generate_all_countries(req: web.Request) -> web.Response:
    pipeline = _country(req)
    scheduler = _scheduler(req)
    runs = pipeline.issue_generate_all()
    if not runs:
        return _conflict(req, "No slot has an image to transform")
    for run in runs.values():
        await scheduler.spawn(run)
    return _state(req, status=202)


async def reset_country(req: web.Request) -> web.Response:
    _country(req).reset(_slot_index(req))
    return _state(req)


async def clear_country_result(req: web.Request) -> web.Response:
    pipeline = _country(req)
    if not pipeline.clear_result(_slot_index(req)):
        return _conflict(req, "Slot has no result")
    return _state(req)


async def export_country(req: web.Request) -> web.Response:
    pipeline = _country(req)
    index = _slot_index(req)
    return _export_response(pipeline.slot(index).result, mode=Mode.COUNTRY, index=index)


routes = [
    web.get("/api/state", get_state),
    web.get("/api/catalog", get_catalog),
    web.get("/api/countries", list_countries),
    web.post("/api/mode", change_mode),
    web.put("/api/single/parameter", set_single_parameter),
    web.post("/api/single/submit", submit_single),
    web.post("/api/single/retry", retry_single),
    web.post("/api/single/reset", reset_single),
    web.get("/api/single/export", export_single),
    web.put("/api/country/slots/{index}/country", set_country),
    web.post("/api/country/slots/{index}/image", attach_country_image),
    web.delete("/api/country/slots/{index}/image", remove_country_image),
    web.post("/api/country/slots/{index}/generate", generate_country),
    web.post("/api/country/slots/{index}/reset", reset_country),
    web.post("/api/country/slots/{index}/clear-result", clear_country_result),
    web.get("/api/country/slots/{index}/export", export_country),
    web.post("/api/country/generate-all", generate_all_countries),
]
