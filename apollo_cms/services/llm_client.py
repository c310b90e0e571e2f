from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from apollo_cms.core.config import settings

logger = logging.getLogger(__name__)


class LLMNotConfiguredError(Exception):
    pass


class LLMRequestError(Exception):
    pass


def _llm_enabled() -> bool:
    key = str(settings.LLM_API_KEY or "").strip()
    return bool(key) and key != "change_me"


def complete_json(system_prompt: str, user_prompt: str) -> dict[str, Any]:
    """Ask the chat-completions endpoint for a JSON object and return it parsed.

    One request, no retries. Transport errors, non-2xx replies and replies that
    are not a JSON object all raise ``LLMRequestError``.
    """
    if not _llm_enabled():
        raise LLMNotConfiguredError("LLM_API_KEY is not configured")

    url = f"{str(settings.LLM_API_URL).rstrip('/')}/chat/completions"
    payload = {
        "model": settings.LLM_MODEL,
        "response_format": {"type": "json_object"},
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
    }
    headers = {"Authorization": f"Bearer {str(settings.LLM_API_KEY).strip()}"}

    try:
        with httpx.Client(timeout=float(settings.LLM_TIMEOUT_SECONDS)) as client:
            response = client.post(url, json=payload, headers=headers)
    except httpx.HTTPError as exc:
        logger.warning("llm_request_failed model=%s error=%s", settings.LLM_MODEL, exc)
        raise LLMRequestError(str(exc)) from exc

    if response.status_code >= 400:
        logger.warning("llm_request_rejected model=%s status=%s", settings.LLM_MODEL, response.status_code)
        raise LLMRequestError(f"LLM responded with status {response.status_code}")

    try:
        data = response.json()
        text = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise LLMRequestError("LLM response has no message content") from exc
    if not str(text or "").strip():
        raise LLMRequestError("LLM returned an empty message")

    try:
        parsed = json.loads(text)
    except ValueError as exc:
        raise LLMRequestError("LLM message is not valid JSON") from exc
    if not isinstance(parsed, dict):
        raise LLMRequestError("LLM message is not a JSON object")
    return parsed
