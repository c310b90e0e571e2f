from __future__ import annotations

import logging

from botocore.exceptions import ClientError
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from apollo_cms.api.admin.common import commit_or_409, get_or_404
from apollo_cms.core.config import settings
from apollo_cms.core.deps import get_audit_actor, get_current_user
from apollo_cms.db.session import get_db
from apollo_cms.models.common import iso_or_none
from apollo_cms.models.media_item import MediaItem
from apollo_cms.schemas.universal import SortClause, UniversalQuery
from apollo_cms.schemas.uploads import MediaAltTextPayload, MediaCompletePayload, MediaInitPayload, MediaInitResponse
from apollo_cms.services.audit import AuditActor, log_audit_event
from apollo_cms.services.s3_storage import build_object_key, get_s3_storage, is_media_key
from apollo_cms.services.universal_query import run_universal_query

logger = logging.getLogger(__name__)

router = APIRouter()


def _max_file_bytes() -> int:
    return int(settings.MAX_FILE_MB) * 1024 * 1024


def _validate_size_or_400(size_bytes: int) -> None:
    if int(size_bytes or 0) <= 0:
        raise HTTPException(status_code=400, detail="Invalid file size")
    if int(size_bytes) > _max_file_bytes():
        raise HTTPException(status_code=400, detail=f"File exceeds the {settings.MAX_FILE_MB} MB limit")


def media_row(row: MediaItem) -> dict:
    return {
        "id": str(row.id),
        "fileName": row.file_name,
        "objectKey": row.object_key,
        "mimeType": row.mime_type,
        "sizeBytes": row.size_bytes,
        "altText": row.alt_text,
        "uploadedBy": row.uploaded_by,
        "createdAt": iso_or_none(row.created_at),
    }


@router.post("/query")
def query_media(uq: UniversalQuery, db: Session = Depends(get_db), user=Depends(get_current_user)):
    rows, total = run_universal_query(db.query(MediaItem), MediaItem, uq, [SortClause(field="createdAt", dir="desc")])
    return {"rows": [media_row(r) for r in rows], "total": total}


@router.post("/init", response_model=MediaInitResponse)
def media_init(payload: MediaInitPayload, user=Depends(get_current_user)):
    _validate_size_or_400(payload.size_bytes)
    key = build_object_key(payload.file_name)
    url = get_s3_storage().create_presigned_put_url(key, payload.mime_type)
    return MediaInitResponse(key=key, presigned_url=url)


@router.post("/complete", status_code=201)
def media_complete(
    payload: MediaCompletePayload,
    db: Session = Depends(get_db),
    actor: AuditActor = Depends(get_audit_actor),
):
    _validate_size_or_400(payload.size_bytes)
    if not is_media_key(payload.key):
        raise HTTPException(status_code=400, detail="Object key is outside the media library")

    try:
        head = get_s3_storage().head_object(payload.key)
    except ClientError:
        raise HTTPException(status_code=400, detail="Uploaded file not found in storage")
    size_bytes = int(head.get("ContentLength") or payload.size_bytes)
    _validate_size_or_400(size_bytes)

    row = MediaItem(
        file_name=payload.file_name,
        object_key=payload.key,
        mime_type=str(head.get("ContentType") or payload.mime_type),
        size_bytes=size_bytes,
        alt_text=payload.alt_text,
        uploaded_by=actor.user_id,
    )
    commit_or_409(db, row, "This file is already in the media library")
    log_audit_event(db, actor, "CREATE", "MediaItem", str(row.id), row.file_name, {"objectKey": row.object_key})
    return media_row(row)


@router.get("/{id}")
def get_media(id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    row = get_or_404(db, MediaItem, id, "Media item not found")
    data = media_row(row)
    data["url"] = get_s3_storage().create_presigned_get_url(row.object_key, file_name=row.file_name)
    return data


@router.patch("/{id}")
def update_media(
    id: str,
    payload: MediaAltTextPayload,
    db: Session = Depends(get_db),
    actor: AuditActor = Depends(get_audit_actor),
):
    row = get_or_404(db, MediaItem, id, "Media item not found")
    row.alt_text = payload.alt_text
    commit_or_409(db, row, "This file is already in the media library")
    log_audit_event(db, actor, "UPDATE", "MediaItem", str(row.id), row.file_name, {"altText": row.alt_text})
    return media_row(row)


@router.delete("/{id}")
def delete_media(id: str, db: Session = Depends(get_db), actor: AuditActor = Depends(get_audit_actor)):
    row = get_or_404(db, MediaItem, id, "Media item not found")
    try:
        get_s3_storage().delete_object(row.object_key)
    except ClientError as exc:
        logger.warning("media_object_delete_failed key=%s error=%s", row.object_key, exc)
        raise HTTPException(status_code=502, detail="Failed to delete the file from storage")
    media_id, name = str(row.id), row.file_name
    db.delete(row)
    db.commit()
    log_audit_event(db, actor, "DELETE", "MediaItem", media_id, name)
    return {"status": "deleted"}
