from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from apollo_cms.schemas.content_schema import ContentSchemaIn, new_field_id
from apollo_cms.services.llm_client import LLMRequestError, complete_json

logger = logging.getLogger(__name__)

GENERATION_FAILED = "AI failed to generate a valid schema."

SYSTEM_PROMPT = """You design content schemas for a headless CMS. Read the JSON sample from the user and answer with one JSON object:
{"name": str, "slug": str, "description": str, "fields": [{"id": str, "name": str, "label": str, "type": str, "required": bool, "fields": [...]}]}

The sample is either a flat object mapping keys to type hints, or an object with a single key whose value is an array holding one sample item.

Rules:
1. Flat object: infer a descriptive schema name and description from the keys. Single-key array: name the schema after that key (e.g. "jobs" -> "Jobs").
2. slug: lowercase letters, digits and hyphens only, derived from the name.
3. Flat object: one field per key. Single-key array: exactly one field of type "repeater" named after the key, whose "fields" come from the keys of the first array item.
4. Skip keys ending in "_class" or "_icon_class" and keys containing "button".
5. Each field name is the original JSON key; the label is the key in human-readable form ("job_title" -> "Job Title").
6. Types: "string (URL)" or "string (Image URL)" -> "image_url"; "string" -> "textarea" when the key suggests long text (description, bio, content), otherwise "text"; "number" -> "number"; "boolean" -> "boolean".
7. "required" is false for every field.
8. Give every field and sub-field a unique UUID "id". Only repeater fields carry "fields".
"""


class SchemaGenerationError(Exception):
    pass


def ensure_ids(fields: list[Any]) -> list[Any]:
    """Give every field and repeater sub-field an id if the model left it out."""
    result = []
    for field in fields:
        if not isinstance(field, dict):
            result.append(field)
            continue
        item = dict(field)
        if not str(item.get("id") or "").strip():
            item["id"] = new_field_id()
        if item.get("type") == "repeater" and isinstance(item.get("fields"), list):
            item["fields"] = ensure_ids(item["fields"])
        result.append(item)
    return result


def generate_schema_from_json(json_content: str) -> ContentSchemaIn:
    """Draft a content schema from a JSON sample with the hosted LLM.

    Raises ``ValueError`` for input that is not JSON, ``LLMNotConfiguredError``
    when no model is configured and ``SchemaGenerationError`` for anything the
    model gets wrong.
    """
    text = str(json_content or "").strip()
    if not text:
        raise ValueError("JSON content is required")
    try:
        json.loads(text)
    except ValueError as exc:
        raise ValueError(f"Invalid JSON: {exc}") from exc

    try:
        output = complete_json(SYSTEM_PROMPT, f"Generate the schema for this JSON sample:\n```json\n{text}\n```")
    except LLMRequestError as exc:
        logger.warning("schema_generation_failed reason=%s", exc)
        raise SchemaGenerationError(GENERATION_FAILED) from exc

    fields = output.get("fields")
    output["fields"] = ensure_ids(fields) if isinstance(fields, list) else []
    try:
        return ContentSchemaIn.model_validate(output)
    except ValidationError as exc:
        logger.warning("schema_generation_invalid errors=%s", exc.error_count())
        raise SchemaGenerationError(GENERATION_FAILED) from exc
