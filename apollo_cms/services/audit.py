from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from apollo_cms.models.audit_log import AuditLog
from apollo_cms.models.common import utcnow

logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Unknown User"


@dataclass(frozen=True)
class AuditActor:
    user_id: str
    email: str = ""
    name: str = ""

    @classmethod
    def from_claims(cls, claims: dict | None) -> AuditActor | None:
        if not claims:
            return None
        user_id = str(claims.get("sub") or "").strip()
        if not user_id:
            return None
        return cls(
            user_id=user_id,
            email=str(claims.get("email") or "").strip(),
            name=str(claims.get("name") or "").strip(),
        )

    @property
    def display_name(self) -> str:
        return self.name or self.email or UNKNOWN_USER_NAME


def _safe_details(details: dict[str, Any] | str | None) -> dict[str, Any] | str:
    if details is None:
        return {}
    if isinstance(details, str):
        return details
    if not isinstance(details, dict):
        return str(details)
    safe: dict[str, Any] = {}
    for key, value in details.items():
        if value is None or isinstance(value, (str, int, float, bool, list, dict)):
            safe[str(key)] = value
        else:
            safe[str(key)] = str(value)
    return safe


def log_audit_event(
    db: Session,
    actor: AuditActor | None,
    action: str,
    entity_type: str,
    entity_id: str,
    entity_name: str | None = None,
    details: dict[str, Any] | str | None = None,
) -> None:
    """Append one audit record in its own transaction.

    Call after the tracked mutation has committed. The audit write never raises:
    a failed write is rolled back and logged, and the mutation stands.
    """
    if actor is None:
        logger.error("audit_skipped_without_actor action=%s entity=%s:%s", action, entity_type, entity_id)
        return

    row = AuditLog(
        user_id=actor.user_id,
        user_name=actor.display_name,
        action=str(action or "").strip() or "UNKNOWN",
        entity_type=str(entity_type or "").strip() or "Unknown",
        entity_id=str(entity_id),
        entity_name=str(entity_name or entity_id),
        details=_safe_details(details),
        timestamp=utcnow(),
    )
    try:
        db.add(row)
        db.commit()
    except Exception:
        logger.exception(
            "audit_write_failed action=%s entity=%s:%s user=%s",
            row.action,
            row.entity_type,
            row.entity_id,
            row.user_id,
        )
        try:
            db.rollback()
        except Exception:
            logger.debug("audit_rollback_failed", exc_info=True)
