from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from apollo_cms.api.admin.common import get_or_404
from apollo_cms.core.deps import get_current_user
from apollo_cms.core.security import create_access_token, verify_password
from apollo_cms.db.session import get_db
from apollo_cms.models.common import utcnow
from apollo_cms.models.user import User
from apollo_cms.schemas.admin import AdminLogin, AdminToken
from apollo_cms.services.admin_bootstrap import (
    ensure_bootstrap_admin_for_login,
    get_user_by_email,
    normalize_email,
)

router = APIRouter()


@router.post("/login", response_model=AdminToken)
def login(payload: AdminLogin, db: Session = Depends(get_db)):
    email = normalize_email(payload.email)
    user = ensure_bootstrap_admin_for_login(db, email, payload.password)
    if user is None:
        user = get_user_by_email(db, email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user.last_login_at = utcnow()
    db.add(user)
    db.commit()

    token = create_access_token(user_id=str(user.id), email=user.email, role=user.role, name=user.name)
    return AdminToken(access_token=token)


@router.get("/me")
def me(current: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    user = get_or_404(db, User, str(current.get("sub") or ""), "User not found")
    return {
        "uid": str(user.id),
        "email": user.email,
        "photoURL": user.photo_url,
        "name": user.name,
        "role": user.role,
    }
