from __future__ import annotations

import logging

from apollo_cms.services.llm_client import LLMRequestError, complete_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful assistant. For the note sent by the user, answer with one JSON object:
{"summary": "<concise summary, one or two sentences>", "title": "<short catchy title, three to five words>"}
"""


class NoteSummaryError(Exception):
    pass


def summarize_note(note_content: str) -> dict[str, str]:
    text = str(note_content or "").strip()
    if not text:
        raise ValueError("Note content is required")
    try:
        output = complete_json(SYSTEM_PROMPT, f"Note content:\n{text}")
    except LLMRequestError as exc:
        logger.warning("note_summary_failed reason=%s", exc)
        raise NoteSummaryError("Failed to get a response from the AI model.") from exc

    summary = str(output.get("summary") or "").strip()
    title = str(output.get("title") or "").strip()
    if not summary or not title:
        raise NoteSummaryError("Failed to get a response from the AI model.")
    return {"summary": summary, "title": title}
