from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartmess.api.v1.router import router as api_v1_router
from smartmess.config.logging import configure_logging, get_logger
from smartmess.config.settings import Settings, get_settings
from smartmess.core.error_handlers import register_exception_handlers
from smartmess.core.middleware import register_middlewares
from smartmess.core.security import JWTManager, PasswordHasher
from smartmess.db.database import Database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database pool at startup and drain it at shutdown."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    database.open()
    if not settings.is_production():
        # Production schemas are managed out of band
        database.create_all()
    logger.info(f"{settings.APP_NAME} {settings.API_VERSION} started ({settings.ENVIRONMENT})")
    try:
        yield
    finally:
        database.close()
        logger.info(f"{settings.APP_NAME} stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, title, version and debug mode from Settings.
    - Builds the database gateway and security primitives on app.state.
    - Registers CORS, core middleware and exception handlers.
    - Includes the API router under API_PREFIX.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS)
    app.state.jwt_manager = JWTManager(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_days=settings.ACCESS_TOKEN_EXPIRE_DAYS,
    )

    register_middlewares(app, debug=settings.DEBUG)

    # Credentials cannot be combined with a wildcard origin
    allow_all = settings.CORS_ORIGINS == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    def root():
        return {"message": f"{settings.APP_NAME} API", "version": settings.API_VERSION}

    @app.get(f"{settings.API_PREFIX}/health", tags=["Health"])
    def health():
        return {"status": "OK", "message": "Server is healthy"}

    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    return app


app = create_app()
