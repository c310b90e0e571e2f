from __future__ import annotations

import re
from typing import Annotated
from urllib.parse import urlsplit

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _none_to_empty(value):
    return "" if value is None else value


def _url_or_empty(value: str) -> str:
    text = value.strip()
    if not text:
        return ""
    parts = urlsplit(text)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError("Invalid URL format")
    return text


def _link_or_empty(value: str) -> str:
    # Relative links ("/programs/bsc", "#apply") are allowed alongside absolute URLs.
    text = value.strip()
    if not text or text.startswith(("/", "#")):
        return text
    return _url_or_empty(text)


def _email_or_empty(value: str) -> str:
    text = value.strip()
    if text and not _EMAIL_RE.fullmatch(text):
        raise ValueError("Invalid email format.")
    return text


Text = Annotated[str, BeforeValidator(_none_to_empty)]
Url = Annotated[str, BeforeValidator(_none_to_empty), AfterValidator(_url_or_empty)]
Link = Annotated[str, BeforeValidator(_none_to_empty), AfterValidator(_link_or_empty)]
Email = Annotated[str, BeforeValidator(_none_to_empty), AfterValidator(_email_or_empty)]


class ContentModel(BaseModel):
    """Base for stored page content: camelCase keys on the wire, unknown keys dropped."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class FaqItem(ContentModel):
    question: Text = ""
    answer: Text = ""
