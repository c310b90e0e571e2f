from sqlalchemy import String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from apollo_cms.db.session import Base
from apollo_cms.models.common import UUIDMixin, TimestampMixin

class Task(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "tasks"
    text: Mapped[str] = mapped_column(Text, nullable=False)
    # user id -> ISO completion timestamp; one entry per user who checked the task off.
    completed_by: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    assigned_to: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(80), nullable=True)
