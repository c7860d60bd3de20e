# reverse_ai/services/prompting/prompt_builder.py
from typing import Any

from reverse_ai.data.constants import Mode

from .templates import PROMPT_AGE, PROMPT_COUNTRY, PROMPT_REVERSE, PROMPT_STYLE


def _fill(template: str, **values: Any) -> str:
    # Placeholders are replaced literally; user text may contain braces.
    for key, value in values.items():
        template = template.replace("{{" + key + "}}", str(value))
    return template


def build_prompt(mode: Mode, parameter: Any = None) -> str:
    """
    Renders the instruction sent alongside the source image.

    Args:
        mode: The transformation kind.
        parameter: Target age for AGE, free-text description for STYLE,
            country name for COUNTRY. Ignored for REVERSE. Values are passed
            through unvalidated; range checks belong to the input surface.
    """
    if mode is Mode.REVERSE:
        return PROMPT_REVERSE
    if mode is Mode.AGE:
        return _fill(PROMPT_AGE, TARGET_AGE=parameter)
    if mode is Mode.STYLE:
        return _fill(PROMPT_STYLE, STYLE_DESCRIPTION="" if parameter is None else parameter)
    if mode is Mode.COUNTRY:
        return _fill(PROMPT_COUNTRY, COUNTRY="" if parameter is None else parameter)
    raise ValueError(f"Unknown mode: {mode!r}")
