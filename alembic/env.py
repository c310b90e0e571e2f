from logging.config import fileConfig
from alembic import context
from sqlalchemy import engine_from_config, pool
from apollo_cms.core.config import settings
from apollo_cms.db.session import Base

# import models
from apollo_cms.models.user import User
from apollo_cms.models.role import Role
from apollo_cms.models.page import Page
from apollo_cms.models.content_schema import ContentSchema
from apollo_cms.models.content_block import ContentBlock
from apollo_cms.models.audit_log import AuditLog
from apollo_cms.models.task import Task
from apollo_cms.models.media_item import MediaItem
from apollo_cms.models.site_settings import SiteSettings

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)
target_metadata = Base.metadata

def get_url():
    return settings.DATABASE_URL

def run_migrations_offline():
    context.configure(url=get_url(), target_metadata=target_metadata, literal_binds=True, compare_type=True)
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    cfg = config.get_section(config.config_ini_section) or {}
    cfg["sqlalchemy.url"] = get_url()
    connectable = engine_from_config(cfg, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
