from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from apollo_cms.core.deps import get_current_user
from apollo_cms.db.session import get_db
from apollo_cms.models.audit_log import AuditLog
from apollo_cms.models.common import iso_or_none
from apollo_cms.schemas.universal import SortClause, UniversalQuery
from apollo_cms.services.universal_query import run_universal_query

router = APIRouter()


def audit_row(row: AuditLog) -> dict:
    return {
        "id": str(row.id),
        "userId": row.user_id,
        "userName": row.user_name,
        "action": row.action,
        "entityType": row.entity_type,
        "entityId": row.entity_id,
        "entityName": row.entity_name,
        "details": row.details,
        "timestamp": iso_or_none(row.timestamp),
    }


@router.post("/query")
def query_audit_logs(uq: UniversalQuery, db: Session = Depends(get_db), user=Depends(get_current_user)):
    rows, total = run_universal_query(db.query(AuditLog), AuditLog, uq, [SortClause(field="timestamp", dir="desc")])
    return {"rows": [audit_row(r) for r in rows], "total": total}
