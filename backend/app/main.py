"""
FastAPI application entry point.

Uses structured logging from skillshare.logging.
Validates security configuration before the app is built: a missing
JWT_SECRET_KEY stops startup with ConfigurationError.
"""

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from skillshare import __version__
from skillshare.config import Settings, TokenConfig, get_settings
from skillshare.db import db
from skillshare.exceptions import ConfigurationError
from skillshare.logging import RequestLoggingMiddleware, configure_logging, get_logger
from skillshare.security import (
    DEFAULT_POLICY,
    Access,
    AuthorizationGate,
    TokenService,
    validate_security_config,
)
from skillshare.security.gate import rule

from .error_handlers import register_exception_handlers
from .middleware.authorization import AuthorizationMiddleware
from .middleware.request_id import RequestIDMiddleware
from .routers import auth as auth_router
from .routers import learning_plans as learning_plans_router
from .routers import notifications as notifications_router
from .routers import posts as posts_router
from .routers import users as users_router

logger = get_logger("api")

# Served outside the API prefix
INFRA_POLICY = (
    rule("/health/**", Access.PUBLIC, "GET"),
    rule("/docs/**", Access.PUBLIC, "GET"),
    rule("/redoc", Access.PUBLIC, "GET"),
    rule("/openapi.json", Access.PUBLIC, "GET"),
)


def validate_security_on_startup(settings: Settings) -> None:
    """Validate security configuration before building the app."""
    try:
        result = validate_security_config(
            jwt_secret=settings.jwt_secret_key,
            cors_origins=settings.cors_allowed_origins,
            database_url=settings.database_url,
        )
    except ConfigurationError as e:
        for error in e.errors:
            logger.error("security_config_error", error=error)
        raise

    for warning in result.warnings:
        logger.warning("security_warning", message=warning)
    logger.info("security_validation_passed")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(level="DEBUG" if settings.debug else "INFO")

    validate_security_on_startup(settings)
    token_service = TokenService(TokenConfig.from_settings(settings))
    gate = AuthorizationGate(
        token_service,
        rules=INFRA_POLICY + DEFAULT_POLICY,
        prefix=settings.api_prefix,
    )

    app = FastAPI(title=settings.app_name, version=__version__, debug=settings.debug)
    app.state.settings = settings
    app.state.token_service = token_service

    # Innermost first: the gate must see requests after CORS has answered preflights
    app.add_middleware(AuthorizationMiddleware, gate=gate)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Accept-Encoding",
            "Origin",
            "X-Requested-With",
            "X-Request-ID",
        ],
    )

    # GZip compression for responses > 500 bytes
    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RequestLoggingMiddleware)
    # Outermost: request_id is bound before RequestLoggingMiddleware runs
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        logger.info("app_startup", app_name=settings.app_name)
        db.initialize(settings.database_url)
        db.create_all_tables()
        logger.info("database_initialized")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("app_shutdown")

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe. Returns no infrastructure details."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """Readiness probe. 503 until the database answers."""
        database = db.health_check()
        checks = {"database": database["healthy"]}
        if not database["healthy"]:
            logger.warning("readiness_check_failed", error=database["error"])
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )
        return {"status": "ready", "checks": checks}

    app.include_router(auth_router.router, prefix=settings.api_prefix)
    app.include_router(users_router.router, prefix=settings.api_prefix)
    app.include_router(posts_router.router, prefix=settings.api_prefix)
    app.include_router(learning_plans_router.router, prefix=settings.api_prefix)
    app.include_router(notifications_router.router, prefix=settings.api_prefix)

    return app


app = create_app()
