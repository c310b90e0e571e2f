from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from apollo_cms.api.admin.common import commit_or_409, get_or_404
from apollo_cms.core.deps import get_audit_actor, get_current_user
from apollo_cms.db.session import get_db
from apollo_cms.models.common import iso_or_none
from apollo_cms.models.page import Page
from apollo_cms.schemas.universal import SortClause, UniversalQuery
from apollo_cms.services.audit import AuditActor, log_audit_event
from apollo_cms.services.page_content import default_content, parse_page_type
from apollo_cms.services.page_form import PageFormState
from apollo_cms.services.slug_check import is_slug_taken
from apollo_cms.services.universal_query import run_universal_query

router = APIRouter()

SLUG_CONFLICT = "This slug is already in use"


def page_row(row: Page, *, with_content: bool = True) -> dict:
    data = {
        "id": str(row.id),
        "title": row.title,
        "slug": row.slug,
        "status": row.status,
        "author": row.author,
        "pageType": row.page_type,
        "createdAt": iso_or_none(row.created_at),
        "updatedAt": iso_or_none(row.updated_at),
    }
    if with_content:
        data["content"] = row.content or {}
    return data


@router.post("/query")
def query_pages(uq: UniversalQuery, db: Session = Depends(get_db), user=Depends(get_current_user)):
    rows, total = run_universal_query(db.query(Page), Page, uq, [SortClause(field="updatedAt", dir="desc")])
    return {"rows": [page_row(r, with_content=False) for r in rows], "total": total}


@router.get("/slug-availability")
def slug_availability(
    slug: str = Query(...),
    current_slug: Optional[str] = Query(None, alias="currentSlug"),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return {"slug": slug, "available": not is_slug_taken(db, slug, current_slug)}


@router.get("/content-defaults/{page_type}")
def content_defaults(page_type: str, user=Depends(get_current_user)):
    return {"pageType": parse_page_type(page_type).value, "content": default_content(page_type)}


@router.get("/{id}")
def get_page(id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return page_row(get_or_404(db, Page, id, "Page not found"))


@router.post("", status_code=201)
def create_page(
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    actor: AuditActor = Depends(get_audit_actor),
):
    form = PageFormState(payload)
    if not form.slug.strip():
        form.set_title(form.title)
    page = form.submit()
    row = Page(
        title=page.title,
        slug=page.slug,
        status=page.status,
        author=page.author,
        page_type=page.page_type,
        content=page.content,
    )
    commit_or_409(db, row, SLUG_CONFLICT)
    log_audit_event(db, actor, "CREATE", "Page", str(row.id), row.title, {"slug": row.slug, "pageType": row.page_type})
    return page_row(row)


@router.patch("/{id}")
def update_page(
    id: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    actor: AuditActor = Depends(get_audit_actor),
):
    row = get_or_404(db, Page, id, "Page not found")
    current = page_row(row)
    form = PageFormState(current)
    if "pageType" in payload:
        form.select_page_type(payload["pageType"])
    for key in ("title", "slug", "status", "author"):
        if key in payload:
            setattr(form, key, payload[key])
    if "content" in payload:
        form.content = payload["content"]
    page = form.submit()

    changed = [key for key, value in page.as_document().items() if current.get(key) != value]
    row.title = page.title
    row.slug = page.slug
    row.status = page.status
    row.author = page.author
    row.page_type = page.page_type
    row.content = page.content
    commit_or_409(db, row, SLUG_CONFLICT)
    log_audit_event(db, actor, "UPDATE", "Page", str(row.id), row.title, {"changedFields": changed})
    return page_row(row)


@router.delete("/{id}")
def delete_page(id: str, db: Session = Depends(get_db), actor: AuditActor = Depends(get_audit_actor)):
    row = get_or_404(db, Page, id, "Page not found")
    page_id, title = str(row.id), row.title
    db.delete(row)
    db.commit()
    log_audit_event(db, actor, "DELETE", "Page", page_id, title)
    return {"status": "deleted"}
