"""Editing state for a single page, mirroring the page editor form.

``PageFormState`` owns the base metadata and the type-specific content of the
page being edited. It never talks to the database: ``submit`` hands back a
validated ``PagePayload`` for the caller to persist.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from apollo_cms.schemas.admin import PageBase
from apollo_cms.services import page_content
from apollo_cms.services.page_content import ContentValidationError, PageType
from apollo_cms.services.slug_check import DebouncedSlugCheck
from apollo_cms.services.slugs import generate_slug


@dataclass
class PagePayload:
    title: str
    slug: str
    status: str
    author: str
    page_type: str
    content: dict[str, Any] = field(default_factory=dict)

    def as_document(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "slug": self.slug,
            "status": self.status,
            "author": self.author,
            "pageType": self.page_type,
            "content": self.content,
        }


class PageFormState:
    def __init__(self, initial: dict[str, Any] | None = None, *, slug_check: DebouncedSlugCheck | None = None):
        self.initial = copy.deepcopy(initial) if initial else None
        data = self.initial or {}
        self.title: str = str(data.get("title") or "")
        self.slug: str = str(data.get("slug") or "")
        self.status: str = str(data.get("status") or "Draft")
        self.author: str = str(data.get("author") or "Admin")
        self.page_type = page_content.parse_page_type(data.get("pageType") or PageType.GENERIC)
        if self.initial and isinstance(self.initial.get("content"), dict):
            self.content: dict[str, Any] = copy.deepcopy(self.initial["content"])
        else:
            self.content = page_content.default_content(self.page_type)
        self.slug_check = slug_check

    @property
    def initial_page_type(self) -> PageType | None:
        if not self.initial or not self.initial.get("pageType"):
            return None
        return page_content.parse_page_type(self.initial["pageType"])

    # Base fields ----------------------------------------------------------

    def set_title(self, title: str) -> None:
        self.title = title
        # A stored slug is never rewritten from the title.
        if title and not (self.initial and str(self.initial.get("slug") or "").strip()):
            self._set_slug(generate_slug(title))

    def set_slug(self, slug: str) -> None:
        self._set_slug(slug)

    # Without a running event loop the attached slug check is skipped.
    def _set_slug(self, slug: str) -> None:
        self.slug = slug
        if self.slug_check is not None and slug:
            self.slug_check.submit(slug)

    # Page type ------------------------------------------------------------

    def select_page_type(self, page_type: PageType | str) -> None:
        new_type = page_content.parse_page_type(page_type)
        if self.initial_page_type == new_type and isinstance(self.initial.get("content"), dict):
            self.content = copy.deepcopy(self.initial["content"])
        else:
            self.content = page_content.default_content(new_type)
        self.page_type = new_type

    # Repeating sections ---------------------------------------------------

    def can_append(self, path: str) -> bool:
        return page_content.can_append(self.page_type, self.content, path)

    def can_remove(self, path: str) -> bool:
        return page_content.can_remove(self.page_type, self.content, path)

    def append_item(self, path: str) -> None:
        self.content = page_content.append_item(self.page_type, self.content, path)

    def remove_item(self, path: str, index: int) -> None:
        self.content = page_content.remove_item(self.page_type, self.content, path, index)

    def items(self, path: str) -> list:
        return page_content.resolve_list(self.content, path)

    # Submission -----------------------------------------------------------

    def validate(self) -> dict[str, str]:
        try:
            self.submit()
        except ContentValidationError as exc:
            return exc.errors
        return {}

    def submit(self) -> PagePayload:
        errors: dict[str, str] = {}
        base: PageBase | None = None
        try:
            base = PageBase.model_validate(
                {"title": self.title, "slug": self.slug, "status": self.status, "author": self.author}
            )
        except ValidationError as exc:
            errors.update(page_content.errors_by_path(exc))
        if self.slug_check is not None and self.slug_check.result is not None:
            result = self.slug_check.result
            if result.slug == self.slug and not result.available:
                errors.setdefault("slug", "This slug is already in use")
        content: dict[str, Any] = {}
        try:
            content = page_content.validate_content(self.page_type, self.content)
        except ContentValidationError as exc:
            errors.update(exc.errors)
        if errors or base is None:
            raise ContentValidationError(errors)
        return PagePayload(
            title=base.title,
            slug=base.slug,
            status=base.status,
            author=base.author,
            page_type=self.page_type.value,
            content=content,
        )
