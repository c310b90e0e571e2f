from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from apollo_cms.api.admin.audit_logs import audit_row
from apollo_cms.api.admin.common import get_or_404
from apollo_cms.core.deps import get_audit_actor, get_current_user
from apollo_cms.db.session import get_db
from apollo_cms.models.audit_log import AuditLog
from apollo_cms.models.common import iso_or_none, utcnow
from apollo_cms.models.content_block import ContentBlock
from apollo_cms.models.media_item import MediaItem
from apollo_cms.models.page import Page
from apollo_cms.models.task import Task
from apollo_cms.models.user import User
from apollo_cms.schemas.admin import PAGE_STATUSES, NoteSummarizeIn, TaskCreate
from apollo_cms.services.analytics import fetch_ga_summary
from apollo_cms.services.audit import AuditActor, log_audit_event
from apollo_cms.services.llm_client import LLMNotConfiguredError
from apollo_cms.services.notes import NoteSummaryError, summarize_note

router = APIRouter()

RECENT_PAGES = 3
RECENT_BLOCKS = 2
RECENT_AUDIT = 5


@router.get("/dashboard/summary")
def dashboard_summary(db: Session = Depends(get_db), user=Depends(get_current_user)):
    by_status = dict(db.query(Page.status, func.count(Page.id)).group_by(Page.status).all())
    recent_pages = db.query(Page).order_by(desc(Page.updated_at)).limit(RECENT_PAGES).all()
    recent_blocks = db.query(ContentBlock).order_by(desc(ContentBlock.updated_at)).limit(RECENT_BLOCKS).all()
    recent_audit = db.query(AuditLog).order_by(desc(AuditLog.timestamp)).limit(RECENT_AUDIT).all()
    return {
        "counts": {
            "pages": db.query(func.count(Page.id)).scalar() or 0,
            "contentBlocks": db.query(func.count(ContentBlock.id)).scalar() or 0,
            "mediaItems": db.query(func.count(MediaItem.id)).scalar() or 0,
            "users": db.query(func.count(User.id)).scalar() or 0,
        },
        "pagesByStatus": [{"status": s, "count": int(by_status.get(s, 0))} for s in PAGE_STATUSES],
        "recentContent": [
            {"id": str(p.id), "kind": "page", "title": p.title, "status": p.status, "updatedAt": iso_or_none(p.updated_at)}
            for p in recent_pages
        ]
        + [
            {"id": str(b.id), "kind": "block", "title": b.name, "status": b.status, "updatedAt": iso_or_none(b.updated_at)}
            for b in recent_blocks
        ],
        "recentActivity": [audit_row(a) for a in recent_audit],
    }


@router.get("/dashboard/analytics")
def dashboard_analytics(user=Depends(get_current_user)):
    return fetch_ga_summary()


# Shared tasks ---------------------------------------------------------------

def task_row(row: Task, user_id: str) -> dict:
    completed_by = dict(row.completed_by or {})
    return {
        "id": str(row.id),
        "text": row.text,
        "completedBy": completed_by,
        "assignedTo": list(row.assigned_to or []),
        "createdBy": row.created_by,
        "createdAt": iso_or_none(row.created_at),
        "completed": user_id in completed_by,
    }


@router.get("/tasks")
def list_tasks(db: Session = Depends(get_db), user=Depends(get_current_user)):
    user_id = str(user.get("sub"))
    rows = db.query(Task).order_by(desc(Task.created_at)).all()
    # Stable sort keeps newest-first inside each group.
    rows.sort(key=lambda t: user_id in (t.completed_by or {}))
    return [task_row(r, user_id) for r in rows]


@router.post("/tasks", status_code=201)
def create_task(payload: TaskCreate, db: Session = Depends(get_db), actor: AuditActor = Depends(get_audit_actor)):
    row = Task(text=payload.text, assigned_to=payload.assigned_to, completed_by={}, created_by=actor.user_id)
    db.add(row)
    db.commit()
    db.refresh(row)
    log_audit_event(db, actor, "CREATE", "Task", str(row.id), row.text[:80])
    return task_row(row, actor.user_id)


@router.post("/tasks/{id}/toggle")
def toggle_task(id: str, db: Session = Depends(get_db), actor: AuditActor = Depends(get_audit_actor)):
    row = get_or_404(db, Task, id, "Task not found")
    completed_by = dict(row.completed_by or {})
    if actor.user_id in completed_by:
        completed_by.pop(actor.user_id)
        completed = False
    else:
        completed_by[actor.user_id] = utcnow().isoformat()
        completed = True
    row.completed_by = completed_by
    db.add(row)
    db.commit()
    db.refresh(row)
    if completed:
        log_audit_event(db, actor, "TASK_COMPLETED", "Task", str(row.id), row.text[:80])
    return task_row(row, actor.user_id)


@router.delete("/tasks/{id}")
def delete_task(id: str, db: Session = Depends(get_db), actor: AuditActor = Depends(get_audit_actor)):
    row = get_or_404(db, Task, id, "Task not found")
    task_id, text = str(row.id), row.text
    db.delete(row)
    db.commit()
    log_audit_event(db, actor, "DELETE", "Task", task_id, text[:80])
    return {"status": "deleted"}


# Notes ----------------------------------------------------------------------

@router.post("/notes/summarize")
def summarize(payload: NoteSummarizeIn, user=Depends(get_current_user)):
    try:
        return summarize_note(payload.note_content)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except LLMNotConfiguredError:
        raise HTTPException(status_code=503, detail="AI note summaries are not configured")
    except NoteSummaryError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
