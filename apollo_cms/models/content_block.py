from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from apollo_cms.db.session import Base
from apollo_cms.models.common import UUIDMixin, TimestampMixin

class ContentBlock(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "content_blocks"
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(30), nullable=False, default="Generic")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Draft")
    content: Mapped[str] = mapped_column(Text, nullable=False)
