from __future__ import annotations

import uuid

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session


def parse_uuid_or_404(raw: str, detail: str = "Not found") -> uuid.UUID:
    try:
        return uuid.UUID(str(raw or "").strip())
    except ValueError:
        raise HTTPException(status_code=404, detail=detail)


def get_or_404(db: Session, model, raw_id: str, detail: str):
    row = db.query(model).filter(model.id == parse_uuid_or_404(raw_id, detail)).first()
    if row is None:
        raise HTTPException(status_code=404, detail=detail)
    return row


def commit_or_409(db: Session, row, conflict_detail: str) -> None:
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=conflict_detail)
