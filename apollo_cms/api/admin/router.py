from fastapi import APIRouter
from apollo_cms.api.admin import (
    access,
    audit_logs,
    auth,
    content_blocks,
    content_schemas,
    dashboard,
    media,
    pages,
    site_settings,
)

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["AdminAuth"])
router.include_router(pages.router, prefix="/pages", tags=["AdminPages"])
router.include_router(content_schemas.router, prefix="/content-schemas", tags=["AdminContentSchemas"])
router.include_router(content_blocks.router, prefix="/content-blocks", tags=["AdminContentBlocks"])
router.include_router(access.router, tags=["AdminAccess"])
router.include_router(audit_logs.router, prefix="/audit-logs", tags=["AdminAudit"])
router.include_router(dashboard.router, tags=["AdminDashboard"])
router.include_router(media.router, prefix="/media", tags=["AdminMedia"])
router.include_router(site_settings.router, prefix="/settings", tags=["AdminSettings"])
