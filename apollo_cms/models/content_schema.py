from sqlalchemy import String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from apollo_cms.db.session import Base
from apollo_cms.models.common import UUIDMixin, TimestampMixin

class ContentSchema(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "content_schemas"
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    fields: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
