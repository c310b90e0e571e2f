from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from apollo_cms.api.admin.common import commit_or_409, get_or_404
from apollo_cms.core.deps import require_role
from apollo_cms.core.security import hash_password
from apollo_cms.db.session import get_db
from apollo_cms.models.common import iso_or_none
from apollo_cms.models.role import Role
from apollo_cms.models.user import User
from apollo_cms.schemas.admin import PERMISSIONS, PermissionGrant, RoleUpsert, UserUpsert
from apollo_cms.schemas.universal import SortClause, UniversalQuery
from apollo_cms.services.admin_bootstrap import ADMIN_ROLE
from apollo_cms.services.audit import AuditActor, log_audit_event
from apollo_cms.services.universal_query import run_universal_query

router = APIRouter()

admin_only = require_role(ADMIN_ROLE)


def _actor(admin: dict) -> AuditActor | None:
    return AuditActor.from_claims(admin)


def role_row(row: Role) -> dict:
    return {
        "id": str(row.id),
        "name": row.name,
        "description": row.description,
        "permissions": list(row.permissions or []),
        "createdAt": iso_or_none(row.created_at),
    }


def user_row(row: User) -> dict:
    return {
        "id": str(row.id),
        "name": row.name,
        "email": row.email,
        "role": row.role,
        "photoUrl": row.photo_url,
        "isActive": row.is_active,
        "lastLoginAt": iso_or_none(row.last_login_at),
        "createdAt": iso_or_none(row.created_at),
    }


# Roles ----------------------------------------------------------------------

@router.get("/roles/permissions")
def list_permissions(admin=Depends(admin_only)):
    return [{"id": key, "label": label} for key, label in PERMISSIONS.items()]


@router.post("/roles/query")
def query_roles(uq: UniversalQuery, db: Session = Depends(get_db), admin=Depends(admin_only)):
    rows, total = run_universal_query(db.query(Role), Role, uq, [SortClause(field="name", dir="asc")])
    return {"rows": [role_row(r) for r in rows], "total": total}


@router.post("/roles", status_code=201)
def create_role(payload: RoleUpsert, db: Session = Depends(get_db), admin=Depends(admin_only)):
    row = Role(**payload.model_dump())
    commit_or_409(db, row, "A role with this name already exists")
    log_audit_event(db, _actor(admin), "CREATE", "Role", str(row.id), row.name, {"permissions": row.permissions})
    return role_row(row)


@router.patch("/roles/{id}")
def update_role(id: str, payload: RoleUpsert, db: Session = Depends(get_db), admin=Depends(admin_only)):
    row = get_or_404(db, Role, id, "Role not found")
    for k, v in payload.model_dump().items():
        setattr(row, k, v)
    commit_or_409(db, row, "A role with this name already exists")
    log_audit_event(db, _actor(admin), "UPDATE", "Role", str(row.id), row.name, {"permissions": row.permissions})
    return role_row(row)


@router.put("/roles/{id}/permissions/{permission}")
def set_role_permission(
    id: str,
    permission: str,
    payload: PermissionGrant,
    db: Session = Depends(get_db),
    admin=Depends(admin_only),
):
    if permission not in PERMISSIONS:
        raise HTTPException(status_code=400, detail=f'Unknown permission "{permission}"')
    row = get_or_404(db, Role, id, "Role not found")
    current = [p for p in (row.permissions or []) if p != permission]
    if payload.granted:
        current.append(permission)
    row.permissions = current
    db.add(row)
    db.commit()
    db.refresh(row)
    log_audit_event(
        db,
        _actor(admin),
        "UPDATE",
        "Role",
        str(row.id),
        row.name,
        {"permission": permission, "granted": payload.granted},
    )
    return role_row(row)


@router.delete("/roles/{id}")
def delete_role(id: str, db: Session = Depends(get_db), admin=Depends(admin_only)):
    row = get_or_404(db, Role, id, "Role not found")
    role_id, name = str(row.id), row.name
    # Users keep the role name; there is no cascade.
    db.delete(row)
    db.commit()
    log_audit_event(db, _actor(admin), "DELETE", "Role", role_id, name)
    return {"status": "deleted"}


# Users ----------------------------------------------------------------------

@router.post("/users/query")
def query_users(uq: UniversalQuery, db: Session = Depends(get_db), admin=Depends(admin_only)):
    rows, total = run_universal_query(db.query(User), User, uq, [SortClause(field="name", dir="asc")])
    return {"rows": [user_row(r) for r in rows], "total": total}


@router.post("/users", status_code=201)
def create_user(payload: UserUpsert, db: Session = Depends(get_db), admin=Depends(admin_only)):
    data = payload.model_dump(exclude={"password"})
    row = User(**data, password_hash=hash_password(payload.password) if payload.password else "")
    commit_or_409(db, row, "A user with this email already exists")
    log_audit_event(db, _actor(admin), "CREATE", "User", str(row.id), row.name, {"email": row.email, "role": row.role})
    return user_row(row)


@router.patch("/users/{id}")
def update_user(id: str, payload: UserUpsert, db: Session = Depends(get_db), admin=Depends(admin_only)):
    row = get_or_404(db, User, id, "User not found")
    for k, v in payload.model_dump(exclude={"password"}).items():
        setattr(row, k, v)
    if payload.password:
        row.password_hash = hash_password(payload.password)
    commit_or_409(db, row, "A user with this email already exists")
    log_audit_event(db, _actor(admin), "UPDATE", "User", str(row.id), row.name, {"email": row.email, "role": row.role})
    return user_row(row)


@router.delete("/users/{id}")
def delete_user(id: str, db: Session = Depends(get_db), admin=Depends(admin_only)):
    row = get_or_404(db, User, id, "User not found")
    if str(row.id) == str(admin.get("sub") or ""):
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    user_id, name = str(row.id), row.name
    db.delete(row)
    db.commit()
    log_audit_event(db, _actor(admin), "DELETE", "User", user_id, name)
    return {"status": "deleted"}
