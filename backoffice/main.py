import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backoffice.config import get_settings, reload_settings

reload_settings()
logging.basicConfig(level=get_settings().log_level.upper())
logger = logging.getLogger(__name__)

from backoffice.admin.api import router as admin_router
from backoffice.exceptions import BackendError, NotFoundError, ValidationError

settings = get_settings()

app = FastAPI(
    title="Backoffice",
    description="Real-estate back office: contacts, developments, units, reservations and payment plans",
    version="0.1.0",
)

app.include_router(admin_router, prefix="/admin", tags=["admin"])


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"error": str(exc), "field": exc.field})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    # backend 4xx are the caller's fault and pass through; anything else is a bad gateway
    status = exc.status_code if exc.status_code and 400 <= exc.status_code < 500 else 502
    return JSONResponse(status_code=status, content={"error": str(exc)})


@app.get("/health")
async def health():
    return {"status": "ok", "environment": settings.environment}
