from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from apollo_cms.core.config import settings
from apollo_cms.core.security import decode_jwt
from apollo_cms.services.audit import AuditActor

bearer = HTTPBearer(auto_error=False)


def get_current_user(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> dict:
    if not creds:
        raise HTTPException(status_code=401, detail="Missing authorization token")
    try:
        claims = decode_jwt(creds.credentials, settings.ADMIN_JWT_SECRET)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid token")
    if not str(claims.get("sub") or "").strip():
        raise HTTPException(status_code=401, detail="Invalid token")
    return claims


def require_role(*roles: str):
    allowed = {r.lower() for r in roles}

    def _inner(user: dict = Depends(get_current_user)) -> dict:
        if str(user.get("role") or "").lower() not in allowed:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user
    return _inner


def get_audit_actor(user: dict = Depends(get_current_user)) -> AuditActor:
    return AuditActor.from_claims(user)
