"""Async client for the Gemini ``generateContent`` REST endpoint.

One POST per call: no retries and no upstream streaming. The request timeout
comes from ``Settings.timeout`` and is unbounded by default.
"""
from __future__ import annotations
import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from fitbuddy_relay.common.config import Settings
from fitbuddy_relay.common.errors import UpstreamError
from fitbuddy_relay.common.schema import CandidateText, Found, NotFound

LOGGER = logging.getLogger("fitbuddy.upstream.gemini")

def build_url(settings: Settings) -> str:
    model = quote(settings.model, safe="")
    return f"{settings.api_base.rstrip('/')}/v1beta/models/{model}:generateContent"

def build_payload(prompt: str, settings: Settings) -> dict[str, Any]:
    return {
        "contents": [
            {"role": "user", "parts": [{"text": prompt}]},
        ],
        "generationConfig": {
            "maxOutputTokens": settings.max_output_tokens,
            "temperature": settings.temperature,
        },
    }

def extract_candidate_text(data: Any) -> CandidateText:
    """Locate ``candidates[0].content.parts[0].text`` in a response body."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return NotFound()
    if not isinstance(text, str) or not text:
        return NotFound()
    return Found(text)

async def generate_text(prompt: str, settings: Settings) -> str:
    """
    Send a prompt to Gemini and return the first candidate's text.

    Args:
        prompt: Fully built prompt text.
        settings: Relay settings carrying the key, model and generation config.

    Returns:
        Candidate text, or the compact JSON body when no candidate text exists.

    Raises:
        UpstreamError: On transport failure or a non-2xx response.
    """
    headers = {"x-goog-api-key": settings.api_key or ""}
    payload = build_payload(prompt, settings)
    try:
        async with httpx.AsyncClient(timeout=settings.timeout) as client:
            r = await client.post(build_url(settings), headers=headers, json=payload)
            if not r.is_success:
                raise UpstreamError(r.status_code, r.text)
            data = r.json()
    except httpx.HTTPError as e:
        raise UpstreamError(None, str(e)) from e
    except ValueError as e:
        # 2xx with a body that is not JSON
        raise UpstreamError(r.status_code, r.text) from e

    candidate = extract_candidate_text(data)
    if isinstance(candidate, Found):
        return candidate.text
    LOGGER.warning("Gemini response had no candidate text; returning raw body")
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
