import os
import unittest
from datetime import timedelta
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure settings can be initialized in test environments
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("S3_ENDPOINT", "http://localhost:9000")
os.environ.setdefault("S3_ACCESS_KEY", "test")
os.environ.setdefault("S3_SECRET_KEY", "test")
os.environ.setdefault("S3_BUCKET", "test")

from apollo_cms.core.config import settings
from apollo_cms.core.security import create_jwt
from apollo_cms.db.session import get_db
from apollo_cms.main import app
from apollo_cms.models.audit_log import AuditLog
from apollo_cms.models.content_block import ContentBlock
from apollo_cms.models.content_schema import ContentSchema
from apollo_cms.models.media_item import MediaItem
from apollo_cms.models.page import Page
from apollo_cms.models.role import Role
from apollo_cms.models.site_settings import SiteSettings
from apollo_cms.models.task import Task
from apollo_cms.models.user import User

MODELS = (User, Role, Page, ContentSchema, ContentBlock, AuditLog, Task, MediaItem, SiteSettings)


class AdminApiTestBase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        for model in MODELS:
            model.__table__.create(bind=cls.engine)

    @classmethod
    def tearDownClass(cls):
        for model in reversed(MODELS):
            model.__table__.drop(bind=cls.engine)
        cls.engine.dispose()

    def setUp(self):
        with self.SessionLocal() as db:
            for model in MODELS:
                db.execute(delete(model))
            db.commit()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()

    @staticmethod
    def _auth_headers(role: str = "Editor", email: str | None = None, sub: str | None = None, name: str = "") -> dict[str, str]:
        token = create_jwt(
            {"sub": str(sub or uuid4()), "email": email or f"{role.lower()}@example.com", "role": role, "name": name},
            settings.ADMIN_JWT_SECRET,
            timedelta(minutes=30),
        )
        return {"Authorization": f"Bearer {token}"}

    def _audit_rows(self) -> list[AuditLog]:
        with self.SessionLocal() as db:
            return db.query(AuditLog).all()
