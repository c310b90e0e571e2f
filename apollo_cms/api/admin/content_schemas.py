from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from apollo_cms.api.admin.common import commit_or_409, get_or_404
from apollo_cms.core.deps import get_audit_actor, get_current_user
from apollo_cms.db.session import get_db
from apollo_cms.models.common import iso_or_none
from apollo_cms.models.content_schema import ContentSchema
from apollo_cms.schemas.admin import SchemaGenerateIn
from apollo_cms.schemas.universal import SortClause, UniversalQuery
from apollo_cms.services.audit import AuditActor, log_audit_event
from apollo_cms.services.llm_client import LLMNotConfiguredError
from apollo_cms.services.schema_builder import SchemaDraft
from apollo_cms.services.schema_generation import SchemaGenerationError, generate_schema_from_json
from apollo_cms.services.universal_query import run_universal_query

router = APIRouter()

SLUG_CONFLICT = "A content schema with this slug already exists"


def schema_row(row: ContentSchema) -> dict:
    return {
        "id": str(row.id),
        "name": row.name,
        "slug": row.slug,
        "description": row.description,
        "fields": row.fields or [],
        "createdAt": iso_or_none(row.created_at),
        "updatedAt": iso_or_none(row.updated_at),
    }


@router.post("/query")
def query_schemas(uq: UniversalQuery, db: Session = Depends(get_db), user=Depends(get_current_user)):
    rows, total = run_universal_query(
        db.query(ContentSchema), ContentSchema, uq, [SortClause(field="updatedAt", dir="desc")]
    )
    return {"rows": [schema_row(r) for r in rows], "total": total}


@router.post("/generate")
def generate_schema(payload: SchemaGenerateIn, user=Depends(get_current_user)):
    try:
        schema = generate_schema_from_json(payload.json_content)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except LLMNotConfiguredError:
        raise HTTPException(status_code=503, detail="AI schema generation is not configured")
    except SchemaGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return schema.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.get("/{id}")
def get_schema(id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return schema_row(get_or_404(db, ContentSchema, id, "Content schema not found"))


@router.post("", status_code=201)
def create_schema(
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    actor: AuditActor = Depends(get_audit_actor),
):
    schema = SchemaDraft(payload).submit()
    row = ContentSchema(
        name=schema.name,
        slug=schema.slug,
        description=schema.description,
        fields=[f.model_dump(mode="json", exclude_none=True) for f in schema.fields],
    )
    commit_or_409(db, row, SLUG_CONFLICT)
    log_audit_event(db, actor, "CREATE", "ContentSchema", str(row.id), row.name, {"slug": row.slug})
    return schema_row(row)


@router.patch("/{id}")
def update_schema(
    id: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    actor: AuditActor = Depends(get_audit_actor),
):
    row = get_or_404(db, ContentSchema, id, "Content schema not found")
    if "slug" in payload and payload["slug"] != row.slug:
        raise HTTPException(status_code=400, detail="Slug cannot be changed after the schema is created")
    draft = SchemaDraft(schema_row(row))
    for key in ("name", "description", "fields"):
        if key in payload:
            setattr(draft, key, payload[key] if key != "description" else str(payload[key] or ""))
    schema = draft.submit()

    row.name = schema.name
    row.description = schema.description
    row.fields = [f.model_dump(mode="json", exclude_none=True) for f in schema.fields]
    commit_or_409(db, row, SLUG_CONFLICT)
    log_audit_event(db, actor, "UPDATE", "ContentSchema", str(row.id), row.name, {"slug": row.slug})
    return schema_row(row)


@router.delete("/{id}")
def delete_schema(id: str, db: Session = Depends(get_db), actor: AuditActor = Depends(get_audit_actor)):
    row = get_or_404(db, ContentSchema, id, "Content schema not found")
    schema_id, name = str(row.id), row.name
    db.delete(row)
    db.commit()
    log_audit_event(db, actor, "DELETE", "ContentSchema", schema_id, name)
    return {"status": "deleted"}
