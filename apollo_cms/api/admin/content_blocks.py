from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from apollo_cms.api.admin.common import commit_or_409, get_or_404
from apollo_cms.core.deps import get_audit_actor, get_current_user
from apollo_cms.db.session import get_db
from apollo_cms.models.common import iso_or_none
from apollo_cms.models.content_block import ContentBlock
from apollo_cms.schemas.admin import ContentBlockUpsert
from apollo_cms.schemas.universal import SortClause, UniversalQuery
from apollo_cms.services.audit import AuditActor, log_audit_event
from apollo_cms.services.universal_query import run_universal_query

router = APIRouter()


def block_row(row: ContentBlock) -> dict:
    return {
        "id": str(row.id),
        "name": row.name,
        "type": row.type,
        "status": row.status,
        "content": row.content,
        "createdAt": iso_or_none(row.created_at),
        "updatedAt": iso_or_none(row.updated_at),
    }


@router.post("/query")
def query_blocks(uq: UniversalQuery, db: Session = Depends(get_db), user=Depends(get_current_user)):
    rows, total = run_universal_query(
        db.query(ContentBlock), ContentBlock, uq, [SortClause(field="updatedAt", dir="desc")]
    )
    return {"rows": [block_row(r) for r in rows], "total": total}


@router.get("/{id}")
def get_block(id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return block_row(get_or_404(db, ContentBlock, id, "Content block not found"))


@router.post("", status_code=201)
def create_block(payload: ContentBlockUpsert, db: Session = Depends(get_db), actor: AuditActor = Depends(get_audit_actor)):
    row = ContentBlock(**payload.model_dump())
    commit_or_409(db, row, "Content block already exists")
    log_audit_event(db, actor, "CREATE", "ContentBlock", str(row.id), row.name, {"type": row.type})
    return block_row(row)


@router.patch("/{id}")
def update_block(
    id: str,
    payload: ContentBlockUpsert,
    db: Session = Depends(get_db),
    actor: AuditActor = Depends(get_audit_actor),
):
    row = get_or_404(db, ContentBlock, id, "Content block not found")
    for k, v in payload.model_dump().items():
        setattr(row, k, v)
    commit_or_409(db, row, "Content block already exists")
    log_audit_event(db, actor, "UPDATE", "ContentBlock", str(row.id), row.name, {"status": row.status})
    return block_row(row)


@router.delete("/{id}")
def delete_block(id: str, db: Session = Depends(get_db), actor: AuditActor = Depends(get_audit_actor)):
    row = get_or_404(db, ContentBlock, id, "Content block not found")
    block_id, name = str(row.id), row.name
    db.delete(row)
    db.commit()
    log_audit_event(db, actor, "DELETE", "ContentBlock", block_id, name)
    return {"status": "deleted"}
