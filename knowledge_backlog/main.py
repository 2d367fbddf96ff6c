from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from knowledge_backlog import __version__
from knowledge_backlog.core.config import settings
from knowledge_backlog.core.database import init_db, close_db, get_session_local
from knowledge_backlog.core.exceptions import BacklogError, error_response
from knowledge_backlog.core.logging_config import logger
from knowledge_backlog.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from knowledge_backlog.core.rate_limiter import limiter, rate_limit_exceeded_handler
from knowledge_backlog.api.v1.router import api_router
from knowledge_backlog.services.user_service import authorized_user_service


async def seed_authorized_users():
    """Copy AUTHORIZED_USERS into the allowlist table (existing rows untouched)"""
    if not settings.AUTHORIZED_USERS_LIST:
        return
    session_factory = get_session_local()
    async with session_factory() as session:
        inserted = await authorized_user_service.seed_users(session, settings.AUTHORIZED_USERS_LIST)
    logger.info(f"[Startup] Allowlist seeded ({inserted} new)")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    # Startup
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"API Version: {settings.API_VERSION}")
    logger.info("=" * 60)

    await init_db()
    logger.info("[Startup] Database tables ready")

    await seed_authorized_users()

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Internal backlog of knowledge articles waiting to be documented",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middleware (order matters - last added runs first)
# 1. Default rate limits on every route
app.add_middleware(SlowAPIMiddleware)

# 2. Request logging
app.add_middleware(RequestLoggingMiddleware)

# 3. Security headers
app.add_middleware(SecurityHeadersMiddleware)

# 4. Request size limit
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)

# 5. CORS - Origins from CORS_ORIGINS_STR in .env
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", settings.AUTH_HEADER_NAME],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


# Exception handlers
def _jsonable_errors(errors):
    # ctx may hold exception instances that JSON cannot encode
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in errors
    ]


@app.exception_handler(BacklogError)
async def backlog_exception_handler(request: Request, exc: BacklogError):
    if exc.status_code >= 500:
        logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    missing = [
        ".".join(str(part) for part in err["loc"][1:]) or "body"
        for err in errors if err["type"] == "missing"
    ]
    detail = f"Missing required fields: {', '.join(missing)}" if missing else "Invalid request"

    logger.warning(f"Validation failed on {request.url.path}: {detail}")
    return JSONResponse(
        status_code=400,
        content={"detail": detail, "errors": _jsonable_errors(errors)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": __version__,
        "environment": settings.ENVIRONMENT
    }


# Include API router
app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")


def run():
    """Console entry point"""
    import uvicorn
    uvicorn.run(
        "knowledge_backlog.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
