from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from sqlalchemy import func
from sqlalchemy.orm import Session

from apollo_cms.core.config import settings
from apollo_cms.models.page import Page

logger = logging.getLogger(__name__)

SlugLookup = Callable[[str], Awaitable[bool]]


def is_slug_taken(db: Session, slug: str, current_slug: str | None = None) -> bool:
    """Advisory check; the unique index on ``pages.slug`` is the real guard."""
    normalized = str(slug or "").strip()
    if not normalized:
        return False
    if current_slug and normalized == str(current_slug).strip():
        return False
    count = db.query(func.count(Page.id)).filter(Page.slug == normalized).scalar()
    return int(count or 0) > 0


@dataclass(frozen=True)
class SlugCheckResult:
    slug: str
    available: bool


class DebouncedSlugCheck:
    """Runs the slug lookup once typing settles, for the latest value only.

    Each ``submit`` cancels the pending check. A lookup that finishes after a
    newer value was submitted is dropped, so ``result`` always describes the
    most recent slug.

    Checks are scheduled on the running event loop. Outside one, ``submit``
    only records the slug and no check runs.
    """

    def __init__(self, lookup: SlugLookup, *, current_slug: str | None = None, delay: float | None = None):
        self._lookup = lookup
        self._current_slug = current_slug
        self._delay = settings.SLUG_CHECK_DEBOUNCE_SECONDS if delay is None else delay
        self._latest: str | None = None
        self._task: asyncio.Task | None = None
        self.result: SlugCheckResult | None = None

    def submit(self, slug: str) -> asyncio.Task | None:
        self._latest = slug
        self.result = None
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("slug_check_skipped_without_loop slug=%s", slug)
            self._task = None
            return None
        self._task = loop.create_task(self._run(slug))
        return self._task

    async def _run(self, slug: str) -> SlugCheckResult | None:
        await asyncio.sleep(self._delay)
        if self._current_slug and slug == self._current_slug:
            taken = False
        else:
            taken = await self._lookup(slug)
        if slug != self._latest:
            logger.debug("slug_check_stale slug=%s latest=%s", slug, self._latest)
            return None
        self.result = SlugCheckResult(slug=slug, available=not taken)
        return self.result

    async def wait(self) -> SlugCheckResult | None:
        task = self._task
        if task is None:
            return self.result
        try:
            await task
        except asyncio.CancelledError:
            pass
        return self.result

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
