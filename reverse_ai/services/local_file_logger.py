# reverse_ai/services/local_file_logger.py
import datetime as dt
import json
import uuid
from pathlib import Path
from typing import Any

import structlog

from reverse_ai.services.utils import decode_data_uri, ext_from_content_type

logger = structlog.get_logger(__name__)


def _ensure_parent_and_write_bytes(path: Path, data: bytes) -> None:
    """Safely writes bytes to a file, creating parent directories if needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
    except OSError:
        logger.exception("Failed to write bytes to file", path=str(path))


def _ensure_parent_and_write_text(path: Path, text: str) -> None:
    """Safely writes text to a file, creating parent directories if needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError:
        logger.exception("Failed to write text to file", path=str(path))


def _write_image(dst_dir: Path, stem: str, encoded: str) -> str | None:
    try:
        mime, data = decode_data_uri(encoded)
    except ValueError:
        logger.warning("Skipping undecodable image in generation log", name=stem)
        return None
    name = f"{stem}.{ext_from_content_type(mime)}"
    _ensure_parent_and_write_bytes(dst_dir / name, data)
    return name


async def log_generation_to_disk(
    *,
    prompt: str,
    mode: str,
    slot_index: int,
    source_image: str,
    result_image: str,
    base_dir: Path,
    params: dict[str, Any] | None = None,
) -> Path:
    """
    Archives one successful generation for later inspection.

    Layout:
        base_dir/YYYY-MM-DD/HHMMSS_<mode>_slot<i>_<id>/
            prompt.txt, meta.json, input.<ext>, output.<ext>

    Returns:
        The directory the generation was written to.
    """
    now = dt.datetime.now(dt.timezone.utc)
    run_id = uuid.uuid4().hex[:8]
    dst_dir = (
        Path(base_dir)
        / now.strftime("%Y-%m-%d")
        / f"{now.strftime('%H%M%S')}_{mode.lower()}_slot{slot_index}_{run_id}"
    )

    input_name = _write_image(dst_dir, "input", source_image)
    output_name = _write_image(dst_dir, "output", result_image)
    _ensure_parent_and_write_text(dst_dir / "prompt.txt", prompt)

    meta = {
        "timestamp": now.isoformat(),
        "mode": mode,
        "slot_index": slot_index,
        "input": input_name,
        "output": output_name,
        "params": params or {},
    }
    _ensure_parent_and_write_text(
        dst_dir / "meta.json", json.dumps(meta, ensure_ascii=False, indent=2)
    )
    logger.debug("Generation archived to disk", path=str(dst_dir))
    return dst_dir
