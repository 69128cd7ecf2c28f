import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nurse_mail.config import settings
from nurse_mail.errors import ConfigurationMissing
from nurse_mail.middleware import RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from nurse_mail.providers import resolve_email_provider
from nurse_mail.response import error_response
from nurse_mail.routers import notifications

API_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.admin_api_key:
        raise RuntimeError("ADMIN_API_KEY environment variable is not set. Refusing to start.")
    if not settings.frontend_url:
        logger.warning("FRONTEND_URL is not set; email links will be relative")
    yield


app = FastAPI(
    title="Nurse Platform Mail",
    description="Send account verification and welcome emails for the Nurse Platform.",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# CORS
_cors_origins = (
    [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if settings.cors_origins
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(SecurityHeadersMiddleware)


# --- Exception Handlers ---


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.status_code, exc.detail),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        clean = {k: v for k, v in err.items() if k != "ctx"}
        if "msg" in clean:
            clean["msg"] = str(clean["msg"])
        errors.append(clean)
    return JSONResponse(
        status_code=422,
        content=error_response(422, "Validation error", details=errors),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=error_response(500, "Internal server error"),
    )


# --- Routes ---

api_v1 = APIRouter(prefix="/v1")
api_v1.include_router(notifications.router)
app.include_router(api_v1)


@app.get("/", summary="API root")
async def root():
    return {"name": settings.app_name, "status": "ok", "version": API_VERSION}


@app.get("/health", summary="Health check")
async def health_ping():
    status = "healthy"
    checks = {}

    try:
        provider = resolve_email_provider(settings)
        checks["mail_provider"] = provider.provider_type
    except (ConfigurationMissing, ValueError) as exc:
        checks["mail_provider"] = f"unavailable: {exc}"
        status = "degraded"

    if settings.frontend_url:
        checks["frontend_url"] = "ok"
    else:
        checks["frontend_url"] = "missing"
        status = "degraded"

    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION,
        "checks": checks,
    }
