"""Cleanup and parsing of raw model output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..errors import MalformedResponse
from .schemas import EvaluationResponse

logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"
_OPEN_FENCE_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CLOSE_FENCE_RE = re.compile(r"\s*```$")


def clean_model_text(raw: str) -> str:
    """Remove an outer code fence, a leading byte-order mark and outer whitespace.

    Only a fence wrapping the whole output is removed; backticks inside the
    JSON itself are left alone.
    """
    # str.strip() leaves U+FEFF alone
    text = raw.lstrip(BYTE_ORDER_MARK).strip().lstrip(BYTE_ORDER_MARK).strip()
    text = _OPEN_FENCE_RE.sub("", text, count=1)
    text = _CLOSE_FENCE_RE.sub("", text, count=1)
    return text.strip().lstrip(BYTE_ORDER_MARK).strip()


def normalize_response(raw: str, strict: bool = False) -> Any:
    """Parse model output into the evaluation JSON value.

    With ``strict`` left off, any syntactically valid JSON passes through
    unchanged. With ``strict`` on, the value must match ``EvaluationResponse``.

    Raises:
        MalformedResponse: output is not JSON, or fails strict validation.
    """
    cleaned = clean_model_text(raw)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("JSON parsing failed. Raw AI response:\n%s", raw)
        raise MalformedResponse("Failed to parse AI response as JSON.", raw_text=raw) from e

    if not strict:
        return parsed

    try:
        return EvaluationResponse.model_validate(parsed).model_dump()
    except PydanticValidationError as e:
        logger.error("AI response does not match evaluation schema: %s", e)
        raise MalformedResponse("AI response does not match evaluation schema.", raw_text=raw) from e
