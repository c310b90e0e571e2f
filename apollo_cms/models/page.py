from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column
from apollo_cms.db.session import Base
from apollo_cms.models.common import UUIDMixin, TimestampMixin

class Page(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "pages"
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str | None] = mapped_column(String(200), unique=True, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Draft", index=True)  # Draft|Published|Review
    author: Mapped[str] = mapped_column(String(50), nullable=False)
    page_type: Mapped[str] = mapped_column(String(30), nullable=False, default="generic", index=True)
    content: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
