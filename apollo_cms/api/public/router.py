from fastapi import APIRouter
from apollo_cms.api.public import preview

router = APIRouter()
router.include_router(preview.router, prefix="/preview", tags=["PublicPreview"])
