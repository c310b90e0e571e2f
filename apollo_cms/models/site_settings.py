from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column
from apollo_cms.db.session import Base
from apollo_cms.models.common import TimestampMixin

GLOBAL_SETTINGS_KEY = "global"

class SiteSettings(Base, TimestampMixin):
    __tablename__ = "site_settings"
    key: Mapped[str] = mapped_column(String(50), primary_key=True, default=GLOBAL_SETTINGS_KEY)
    values: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
