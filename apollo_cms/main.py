from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from apollo_cms.core.config import settings
from apollo_cms.core.http_hardening import install_http_hardening
from apollo_cms.api.public.router import router as public_router
from apollo_cms.api.admin.router import router as admin_router
from apollo_cms.services.page_content import ContentBoundsError, ContentPathError, ContentValidationError

app = FastAPI(title=settings.APP_NAME, version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
install_http_hardening(app)


@app.exception_handler(ContentValidationError)
async def content_validation_error(request: Request, exc: ContentValidationError):
    return JSONResponse(status_code=422, content={"detail": "Validation failed", "errors": exc.errors})


@app.exception_handler(ContentBoundsError)
@app.exception_handler(ContentPathError)
async def content_edit_error(request: Request, exc: Exception):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app.include_router(public_router, prefix="/api/public")
app.include_router(admin_router, prefix="/api/admin")

@app.get("/", include_in_schema=False)
def landing():
    return JSONResponse({"service": settings.APP_NAME, "status": "ok"})

@app.get("/health")
def health():
    return {"status": "ok"}
