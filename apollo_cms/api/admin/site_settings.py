from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError
from sqlalchemy.orm import Session

from apollo_cms.core.deps import get_audit_actor, get_current_user
from apollo_cms.db.session import get_db
from apollo_cms.models.site_settings import GLOBAL_SETTINGS_KEY, SiteSettings
from apollo_cms.schemas.admin import SiteSettingsIn
from apollo_cms.services.audit import AuditActor, log_audit_event
from apollo_cms.services.page_content import ContentValidationError, errors_by_path

router = APIRouter()


def load_settings_document(db: Session) -> dict[str, Any]:
    row = db.get(SiteSettings, GLOBAL_SETTINGS_KEY)
    stored = dict(row.values or {}) if row else {}
    try:
        return SiteSettingsIn.model_validate(stored).as_document()
    except ValidationError:
        # A stored document that no longer validates falls back to defaults key by key.
        defaults = SiteSettingsIn().as_document()
        merged = {**defaults, **{k: v for k, v in stored.items() if k in defaults}}
        return merged


@router.get("")
def get_settings(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return load_settings_document(db)


@router.put("")
def put_settings(
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    actor: AuditActor = Depends(get_audit_actor),
):
    try:
        document = SiteSettingsIn.model_validate(payload).as_document()
    except ValidationError as exc:
        raise ContentValidationError(errors_by_path(exc))

    row = db.get(SiteSettings, GLOBAL_SETTINGS_KEY)
    previous = dict(row.values or {}) if row else {}
    if row is None:
        row = SiteSettings(key=GLOBAL_SETTINGS_KEY, values=document)
    else:
        row.values = document
    db.add(row)
    db.commit()
    changed = sorted(k for k, v in document.items() if previous.get(k) != v)
    log_audit_event(db, actor, "UPDATE", "SiteSettings", GLOBAL_SETTINGS_KEY, "Global settings", {"changedFields": changed})
    return document
