from datetime import datetime

from sqlalchemy import DateTime, String, JSON, func
from sqlalchemy.orm import Mapped, mapped_column
from apollo_cms.db.session import Base
from apollo_cms.models.common import UUIDMixin

class AuditLog(Base, UUIDMixin):
    __tablename__ = "audit_logs"
    user_id: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    user_name: Mapped[str] = mapped_column(String(200), nullable=False)
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(80), nullable=False)
    entity_name: Mapped[str | None] = mapped_column(String(300), nullable=True)
    details: Mapped[dict | str] = mapped_column(JSON, default=dict, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
