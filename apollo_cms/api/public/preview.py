from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import or_
from sqlalchemy.orm import Session

from apollo_cms.db.session import get_db
from apollo_cms.models.common import iso_or_none
from apollo_cms.models.page import Page
from apollo_cms.services.page_content import PageType

router = APIRouter()

HOME_SLUG = "home"
PUBLISHED = "Published"


def find_preview_page(db: Session, slug: str) -> Page | None:
    published = db.query(Page).filter(Page.status == PUBLISHED)
    page = published.filter(Page.slug == slug).first()
    if page is None and slug == HOME_SLUG:
        page = (
            published.filter(Page.page_type == PageType.HOME.value, or_(Page.slug.is_(None), Page.slug == ""))
            .order_by(Page.updated_at.desc())
            .first()
        )
    return page


@router.get("")
@router.get("/{slug:path}")
def preview(slug: str = "", db: Session = Depends(get_db)):
    target = str(slug or "").strip("/") or HOME_SLUG
    page = find_preview_page(db, target)
    if page is None:
        return JSONResponse(status_code=404, content={"found": False, "slug": target})
    return {
        "found": True,
        "page": {
            "id": str(page.id),
            "title": page.title,
            "slug": page.slug,
            "status": page.status,
            "author": page.author,
            "pageType": page.page_type,
            "updatedAt": iso_or_none(page.updated_at),
        },
        "content": page.content or {},
    }
