import asyncio
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from rolodex.core.config import get_settings
from rolodex.core.exceptions.handler import add_exception_handlers
from rolodex.core.logging import get_logger, setup_exception_logging, setup_logging
from rolodex.core.middlewares import RequestThrottlerMiddleware, RequestUtilsMiddleware, SecurityHeadersMiddleware
from rolodex.core.settings.base import Settings
from rolodex.domain.repositories import create_store
from rolodex.domain.routers import auth_router, health_router, users_router
from rolodex.domain.services import AuthService, ProfileService, SecurityService, TokenService
from rolodex.libs.cache import setup_cache, teardown_cache
from rolodex.libs.throttler import build_limiter

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Connects the store, builds the cache and the services on ``app.state``,
    and releases them on shutdown. A store that cannot be reached aborts
    startup.
    """
    settings: Settings = app.state.settings
    store = None
    cache = None

    try:
        logger.info("Application startup initiated", extra={"event_type": "app_startup_start"})

        store = create_store(settings)
        await store.connect()

        cache = await setup_cache(settings)

        token_service = TokenService(
            secret_key=settings.AUTH_SECRET_KEY,
            algorithm=settings.AUTH_TOKEN_ALGORITHM,
            max_age=settings.AUTH_TOKEN_MAX_AGE,
        )

        app.state.store = store
        app.state.cache = cache
        app.state.token_service = token_service
        app.state.auth_service = AuthService(
            accounts=store.accounts,
            security_service=SecurityService(rounds=settings.PASSWORD_HASH_ROUNDS),
            token_service=token_service,
        )
        app.state.profile_service = ProfileService(profiles=store.profiles)

        logger.info(
            "Application startup completed successfully",
            extra={
                "event_type": "app_startup_complete",
                "environment": settings.ENVIRONMENT,
                "app_version": settings.APP_VERSION,
                "store_backend": store.name,
            },
        )

    except Exception as exc:
        logger.error(
            "Application startup failed",
            exc_info=True,
            extra={
                "event_type": "app_startup_failed",
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            },
        )
        if store is not None:
            await store.close()
        raise

    try:
        yield
    finally:
        try:
            logger.info("Application shutdown initiated", extra={"event_type": "app_shutdown_start"})

            await teardown_cache(cache)
            await store.close()

            logger.info("Application shutdown completed", extra={"event_type": "app_shutdown_complete"})

        except asyncio.CancelledError:
            logger.info(
                "Application shutdown cancelled - graceful shutdown",
                extra={"event_type": "app_shutdown_cancelled"},
            )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application for ``settings`` (the environment's settings when None).
    """
    settings = settings or get_settings()

    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url=settings.OPENAPI_DOCS_URL,
        openapi_url=settings.OPENAPI_JSON_SCHEMA_URL,
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.limiter = build_limiter(settings) if settings.RATE_LIMIT_ENABLED else None

    add_exception_handlers(app, settings)

    # Middlewares
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_middleware(GZipMiddleware, compresslevel=5)
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.ENVIRONMENT != "local")
    app.add_middleware(RequestThrottlerMiddleware, namespace=settings.RATE_LIMIT_NAMESPACE)
    app.add_middleware(RequestUtilsMiddleware, trust_request_id=settings.TRUST_REQUEST_ID)

    # Routers
    app.include_router(auth_router, prefix="/auth", tags=["Auth"])
    app.include_router(users_router, prefix="/users", tags=["Users"])
    app.include_router(health_router, prefix="/health", include_in_schema=False)

    return app


app = create_app()


def run() -> None:
    settings = app.state.settings

    setup_exception_logging()

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
