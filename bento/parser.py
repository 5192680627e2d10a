import json
import logging
import re
from typing import Any

import pydantic

from bento.errors import ParseError, ValidationError
from bento.models import ApiResponse, FiveResponse, Mode, WeekResponse


logger = logging.getLogger(__name__)


FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)

RESPONSES: dict[Mode, tuple[str, type[WeekResponse] | type[FiveResponse]]] = {
    Mode.week: ("weekData", WeekResponse),
    Mode.five: ("fiveData", FiveResponse),
}


def unfence(raw_text: str) -> str:
    match = FENCE.match(raw_text)
    return raw_text if match is None else match.group(1)


def load_json(raw_text: str) -> Any:
    try:
        return json.loads(unfence(raw_text))
    except json.JSONDecodeError as e:
        logger.info("Generation response is not JSON: %r", raw_text)
        raise ParseError("Response is not JSON.", raw_text=raw_text) from e


def parse(raw_text: str, mode: Mode) -> ApiResponse:
    """Typed plan for `mode` from the raw generation response.

    Raises `ParseError` when the text is not JSON and `ValidationError` when
    the JSON is not shaped like a plan for `mode`. Only the key belonging to
    `mode` is read, so a `fiveData` answer to a `week` request fails.
    """
    data = load_json(raw_text)
    key, response_type = RESPONSES[mode]

    if not isinstance(data, dict):
        raise ValidationError(f"Expecting a JSON object, got {type(data).__name__}.")
    if key not in data:
        raise ValidationError(f"Missing {key!r} for mode {mode.value!r}.")

    try:
        return response_type.model_validate({key: data[key]})
    except pydantic.ValidationError as e:
        raise ValidationError(f"Bad {key!r}: {e}") from e
