from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column
from apollo_cms.db.session import Base
from apollo_cms.models.common import UUIDMixin, TimestampMixin

class MediaItem(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "media_items"
    file_name: Mapped[str] = mapped_column(String(300), nullable=False)
    object_key: Mapped[str] = mapped_column(String(500), unique=True, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(150), nullable=False)
    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)
    alt_text: Mapped[str | None] = mapped_column(String(300), nullable=True)
    uploaded_by: Mapped[str | None] = mapped_column(String(80), nullable=True)
