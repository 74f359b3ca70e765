# company_api/main.py
"""
Company Profile API - Main Application

User registration and login, plus one company profile per user with logo
and banner images hosted by a third-party image service.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from company_api.config import settings
from company_api.database import engine, Base
from company_api.exceptions import AppError
from company_api.schemas.common import ErrorResponse
from company_api.services.assets import MockAssetUploader, build_asset_uploader
from company_api.services.identity import StubIdentityProvider, build_identity_provider

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create tables, report configuration gaps
    - Shutdown: release pooled connections
    """
    # Startup
    logger.info("=" * 80)
    logger.info("🚀 COMPANY PROFILE API STARTING UP")
    logger.info("=" * 80)
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug Mode: {settings.DEBUG}")
    logger.info(f"Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")
    logger.info(f"Asset provider: {settings.ASSET_PROVIDER}")

    # Create database tables (if not exist)
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables created/verified")
    except Exception as e:
        logger.error(f"❌ Database initialization error: {e}")
        raise

    # Validate critical configuration
    if settings.JWT_SECRET == "dev_secret_change_me":
        logger.warning("⚠️  JWT_SECRET is the development default - set it before deploying")

    if isinstance(app.state.identity_provider, StubIdentityProvider):
        logger.warning("⚠️  Identity provider is stubbed - no Firebase accounts will be created")

    if isinstance(app.state.asset_uploader, MockAssetUploader):
        logger.warning("⚠️  Asset uploader is mocked - images are not stored anywhere")

    logger.info("✅ Company Profile API ready to accept requests")
    logger.info("=" * 80)

    yield

    # Shutdown
    logger.info("=" * 80)
    logger.info("🛑 COMPANY PROFILE API SHUTTING DOWN")
    logger.info("=" * 80)
    logger.info("Closing database connections...")
    engine.dispose()
    logger.info("✅ Shutdown complete")
    logger.info("=" * 80)


# =============================================================================
# FASTAPI APPLICATION
# =============================================================================

app = FastAPI(
    title=settings.APP_NAME,
    description="User accounts and company profiles with hosted logo and banner images.",
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check and status endpoints"},
        {"name": "Auth", "description": "Registration, login and verification"},
        {"name": "Company", "description": "Company profile, logo and banner"},
    ]
)

# Collaborators are chosen once per process; tests swap them via dependency_overrides
app.state.identity_provider = build_identity_provider(settings)
app.state.asset_uploader = build_asset_uploader(settings)


# =============================================================================
# MIDDLEWARE
# =============================================================================

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request Logging Middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    logger.info(f"{request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} - {response.status_code}")
    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def error_body(message: str, details=None) -> dict:
    return ErrorResponse(message=message, details=details).model_dump(exclude_none=True)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Handle errors raised by the services"""
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.details)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors"""
    logger.error(f"Validation error on {request.url.path}: {exc.errors()}")
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"]
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", details)
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes and framework-level HTTP errors"""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Route not found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors"""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Database error occurred")
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error")
    )


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint with API information.
    """
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "operational",
        "environment": settings.ENVIRONMENT,
        "docs": "/docs" if settings.DEBUG else None,
        "health": "/health"
    }


# =============================================================================
# IMPORT AND REGISTER ROUTERS
# =============================================================================

from company_api.routers import health, auth, company  # noqa: E402

# Register routers
app.include_router(health.router, prefix="/health", tags=["Health"])
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(company.router, prefix="/api/company", tags=["Company"])


# =============================================================================
# STARTUP MESSAGE
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    logger.info("=" * 80)
    logger.info("Starting Company Profile API in development mode")
    logger.info(f"Visit: http://localhost:{settings.PORT}/docs for API documentation")
    logger.info("=" * 80)

    uvicorn.run(
        "company_api.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
