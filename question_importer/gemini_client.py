import asyncio
from typing import Any, Optional

import httpx

from app.core.config import settings
from question_importer.errors import GeminiAPIError, GeminiConfigError
from question_importer.normalizer import extract_response_text, normalize
from utils.logger import get_logger

logger = get_logger(__name__)

RETRY_STATUS_CODES = {429, 500, 502, 503, 504}
RETRY_DELAY_SECONDS = 1.0


def new_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT_SECONDS)


async def call_gemini(
    prompt: str,
    *,
    api_key: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """
    Sends one prompt to the Gemini generateContent endpoint and returns the
    normalized reply (parsed JSON, or the cleaned text if it is not JSON).
    """
    api_key = api_key or settings.GEMINI_API_KEY
    if not api_key:
        raise GeminiConfigError("GEMINI_API_KEY is not configured")

    headers = {
        "Content-Type": "application/json",
        "X-goog-api-key": api_key,
    }
    body = {"contents": [{"parts": [{"text": prompt}]}]}

    if client is None:
        async with new_http_client() as own_client:
            response = await _post_with_retry(own_client, headers, body)
    else:
        response = await _post_with_retry(client, headers, body)

    if not response.is_success:
        raise GeminiAPIError(
            f"Gemini API failed ({response.status_code}): {response.text[:200]}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise GeminiAPIError(f"Gemini API returned invalid JSON: {response.text[:200]}") from e

    raw_text = extract_response_text(payload)
    logger.info(f"Gemini response received. Length: {len(raw_text)}")
    logger.debug(f"Raw AI Output (Snippet): {raw_text[:500]}...")

    return normalize(raw_text)


async def _post_with_retry(client: httpx.AsyncClient, headers: dict, body: dict) -> httpx.Response:
    attempts = max(1, settings.GEMINI_MAX_ATTEMPTS)

    for attempt in range(1, attempts + 1):
        last_attempt = attempt == attempts
        try:
            response = await client.post(settings.GEMINI_MODEL_URL, headers=headers, json=body)
        except httpx.TransportError as e:
            if last_attempt:
                raise GeminiAPIError(f"Gemini API unreachable: {e}") from e
            logger.warning(f"Gemini request failed ({e!r}); retrying (attempt {attempt}/{attempts})")
        else:
            if response.status_code not in RETRY_STATUS_CODES or last_attempt:
                return response
            logger.warning(f"Gemini returned {response.status_code}; retrying (attempt {attempt}/{attempts})")

        await asyncio.sleep(RETRY_DELAY_SECONDS)
