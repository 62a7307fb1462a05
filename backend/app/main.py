from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.database import init_db, close_db, get_session_local
from app.core.exceptions import (
    InternalError,
    MessFeedbackError,
    RateLimitError,
    ValidationError,
    error_response,
)
from app.core.logging_config import logger
from app.core.middleware import (
    AccessLogMiddleware,
    SecurityHeadersMiddleware,
    BodySizeLimitMiddleware,
)
from app.core.rate_limiter import limiter
from app.api.router import api_router
from app.services.hall_service import hall_service
import app.models  # noqa: F401 - import models so metadata knows about them


async def validate_critical_config():
    """Validate critical configuration at startup - fail fast if missing"""
    errors = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if not settings.JWT_SECRET_KEY or settings.JWT_SECRET_KEY == "CHANGE_ME":
        errors.append("JWT_SECRET_KEY is not set or using default value")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    logger.info("[Startup] Critical configuration validated")
    return True


async def ensure_database_ready():
    """Create missing tables and seed the default halls"""
    try:
        await init_db()
        session_factory = get_session_local()
        async with session_factory() as session:
            created = await hall_service.seed_default_halls(session, settings.get_default_halls())
        logger.info(f"[Startup] Database ready ({created} hall(s) seeded)")
        return True
    except SQLAlchemyError as e:
        logger.error(f"[Startup] Failed to ensure database ready: {e}")
        return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info("=" * 60)

    # Step 1: Validate critical configuration (fail fast!)
    await validate_critical_config()

    # Step 2: Ensure database tables exist
    db_ready = await ensure_database_ready()
    if not db_ready:
        logger.warning("[Startup] Database not ready - requests may fail")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Daily meal reviews, complaints and rating dashboards for campus messes",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Rate limiter state (limits are applied per route as dependencies)
app.state.limiter = limiter

# Add middleware (order matters - last added runs first)
# 1. Access log (request id, user id, timing)
app.add_middleware(AccessLogMiddleware)

# 2. Security headers
app.add_middleware(SecurityHeadersMiddleware)

# 3. Body size cap
app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_REQUEST_BYTES)

# 4. CORS - Origins from CORS_ORIGINS_STR in .env
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


# Exception handlers
@app.exception_handler(MessFeedbackError)
async def mess_feedback_exception_handler(request: Request, exc: MessFeedbackError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", exc_info=True)
    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after:
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=error_response(exc), headers=headers)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "Validation error: " + "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    error = ValidationError(_format_validation_errors(exc))
    return JSONResponse(status_code=error.status_code, content=error_response(error))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    error = InternalError()
    if settings.DEBUG:
        error.details["exception"] = str(exc)
    return JSONResponse(status_code=error.status_code, content=error_response(error))


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }


# Include API router
app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )
