import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .db.migrate import apply_migrations
from .core import errors
from .routers import admin_multipliers, currency
from .services.rates.cache_service import (
    RateTableCacheService,
    build_rate_table_service,
    get_rate_table_service,
)


def create_app(
    settings_override: Settings | None = None,
    rate_service: RateTableCacheService | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    rate_service: inject a cache service wrapping a test provider.
    """
    settings = settings_override or get_settings()
    init_logging(debug=settings.debug)

    try:
        apply_migrations(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        logging.getLogger("storefront").exception("failed to apply migrations on startup")
        raise

    app = FastAPI(title=settings.app_name, debug=settings.debug, version=settings.version)
    app.state.settings = settings
    if rate_service is None:
        rate_service = (
            build_rate_table_service(settings) if settings_override else get_rate_table_service()
        )
    app.state.rate_service = rate_service

    app.middleware("http")(request_context_middleware)

    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    app.include_router(currency.router)
    app.include_router(admin_multipliers.router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": settings.version}

    return app
