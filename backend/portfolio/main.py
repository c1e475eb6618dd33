"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.api.routes import (analytics, auth, content, health, metrics,
                                  page, profile)
from portfolio.core.config import get_settings
from portfolio.core.database import get_session_local, init_db
from portfolio.core.exceptions import InternalError, PortfolioError
from portfolio.core.logging_config import LoggingConfig
from portfolio.core.middleware import LoggingContextMiddleware
from portfolio.core.middleware_metrics import MetricsMiddleware
from portfolio.services.auth_service import AuthService

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)

VERSION = "0.1.0"


def seed_admin():
    """Create the configured admin account when the user table is empty"""
    settings = get_settings()
    db = get_session_local()()
    try:
        AuthService(db).ensure_admin(settings.admin_username, settings.admin_password)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")

    if settings.create_tables_on_startup:
        init_db()
    if settings.seed_admin_on_startup:
        seed_admin()

    yield

    logger.info(f"Shutting down {settings.app_name}...")


def _request_validation_field(exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return None, "Invalid input"
    first = errors[0]
    # loc is ("body", "name") / ("path", "id"); drop the source
    parts = [str(part) for part in first.get("loc", ())[1:]]
    return (".".join(parts) or None), first.get("msg", "Invalid input")


def register_exception_handlers(app: FastAPI):
    """Every failure leaves the API as a JSON ``{message[, field]}`` body"""

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                exc_info=exc.__cause__ or exc,
                extra={"path": request.url.path, "method": request.method},
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        field, message = _request_validation_field(exc)
        logger.info(
            "Rejected invalid request",
            extra={"field": field, "validation_message": message},
        )
        return JSONResponse(status_code=400, content={"message": message, "field": field})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unparseable bodies, unknown paths and wrong methods
        content = {"message": str(exc.detail)}
        if exc.status_code == 400:
            content["field"] = None
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Log unhandled errors; the client only sees a generic message"""
        logger.error(
            "Unhandled exception",
            exc_info=True,
            extra={
                "error": str(exc),
                "error_type": type(exc).__name__,
                "path": request.url.path,
                "method": request.method,
            }
        )
        return JSONResponse(status_code=500, content=InternalError().to_dict())


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Personal portfolio: public page plus an admin content API",
        version=VERSION,
        lifespan=lifespan,
    )

    # Add logging context middleware (before CORS to capture all requests)
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(metrics.router)
    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(content.router)
    app.include_router(analytics.router)
    app.include_router(page.router)

    @app.get("/api")
    def root():
        """Root API endpoint"""
        return {
            "name": settings.app_name,
            "version": VERSION,
            "status": "running",
            "environment": settings.app_env,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "portfolio.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.app_env == "development",
    )
