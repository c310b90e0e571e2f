from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from apollo_cms.core.config import settings
from apollo_cms.core.security import hash_password, verify_password
from apollo_cms.models.role import Role
from apollo_cms.models.user import User
from apollo_cms.schemas.admin import PERMISSIONS

logger = logging.getLogger(__name__)

ADMIN_ROLE = "Admin"


def normalize_email(raw: str | None) -> str:
    return str(raw or "").strip().lower()


def get_user_by_email(db: Session, email: str, *, active_only: bool = True) -> User | None:
    normalized = normalize_email(email)
    if not normalized:
        return None
    q = db.query(User).filter(func.lower(User.email) == normalized)
    if active_only:
        q = q.filter(User.is_active.is_(True))
    return q.first()


def ensure_admin_role(db: Session) -> None:
    if db.query(Role).filter(Role.name == ADMIN_ROLE).first() is not None:
        return
    db.add(Role(name=ADMIN_ROLE, description="Full access", permissions=list(PERMISSIONS)))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()


def ensure_bootstrap_admin_for_login(db: Session, email: str, password: str) -> User | None:
    if not settings.ADMIN_BOOTSTRAP_ENABLED:
        return None

    normalized_email = normalize_email(email)
    bootstrap_email = normalize_email(settings.ADMIN_BOOTSTRAP_EMAIL)
    if normalized_email != bootstrap_email:
        return None
    if str(password or "") != str(settings.ADMIN_BOOTSTRAP_PASSWORD or ""):
        return None

    user = get_user_by_email(db, bootstrap_email, active_only=False)
    if user is None:
        user = User(
            role=ADMIN_ROLE,
            name=str(settings.ADMIN_BOOTSTRAP_NAME or "Administrator"),
            email=bootstrap_email,
            password_hash=hash_password(str(settings.ADMIN_BOOTSTRAP_PASSWORD or "")),
            is_active=True,
        )
        logger.info("bootstrap_admin_created email=%s", bootstrap_email)
    else:
        user.role = ADMIN_ROLE
        user.is_active = True
        if not str(user.name or "").strip():
            user.name = str(settings.ADMIN_BOOTSTRAP_NAME or "Administrator")
        if not verify_password(str(settings.ADMIN_BOOTSTRAP_PASSWORD or ""), str(user.password_hash or "")):
            user.password_hash = hash_password(str(settings.ADMIN_BOOTSTRAP_PASSWORD or ""))
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return get_user_by_email(db, bootstrap_email)
    db.refresh(user)
    ensure_admin_role(db)
    return user
