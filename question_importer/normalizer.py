"""
Best-effort decoding of Gemini replies.

The model is told to answer with pure JSON but frequently wraps it in
markdown fences or glues several objects together without an array.
"""
import json
import re
from typing import Any, Union

from question_importer.errors import EmptyModelResponseError
from utils.logger import get_logger

logger = get_logger(__name__)

FENCE_PATTERN = re.compile(r"```json|```", re.IGNORECASE)
GLUED_OBJECTS_PATTERN = re.compile(r"\}\s*\{")


def _reject_constant(name):
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant {name}")


def extract_response_text(payload: Any) -> str:
    """
    Finds the generated text in a Gemini response envelope.
    Checked in order:
      candidates[0].content.parts[0].text
      candidates[0].output_text
      text
      response.text
    Non-string values count as absent.
    Raises EmptyModelResponseError when none of them is present.
    """
    if not isinstance(payload, dict):
        raise EmptyModelResponseError("Gemini response is not a JSON object")

    candidates = payload.get("candidates") or []
    first = candidates[0] if isinstance(candidates, list) and candidates else {}
    first = first if isinstance(first, dict) else {}

    content = first.get("content") or {}
    parts = (content.get("parts") or []) if isinstance(content, dict) else []
    first_part = parts[0] if isinstance(parts, list) and parts and isinstance(parts[0], dict) else {}

    response = payload.get("response")
    response = response if isinstance(response, dict) else {}

    for text in (
        first_part.get("text"),
        first.get("output_text"),
        payload.get("text"),
        response.get("text"),
    ):
        if isinstance(text, str):
            return text

    raise EmptyModelResponseError("Gemini response contained no usable content")


def strip_fences(raw_text: str) -> str:
    return FENCE_PATTERN.sub("", raw_text).strip()


def normalize(raw_text: str) -> Union[dict, list, str, int, float, bool, None]:
    """
    Turns the model's text into a JSON value.

    1. Direct parse after removing fences.
    2. Parse again with `}{` boundaries comma-separated and the whole text
       wrapped in an array.
    3. Give up and return the cleaned text itself.
    """
    text = strip_fences(raw_text)

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        logger.debug(f"Direct JSON parse failed: {e}")

    repaired = "[" + GLUED_OBJECTS_PATTERN.sub("},{", text) + "]"
    try:
        return json.loads(repaired, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning(f"Could not repair model output ({e}). Keeping raw text.")
        return text
