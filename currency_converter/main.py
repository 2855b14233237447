import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core import errors
from .core.config import Settings, get_settings
from .core.logging import init_logging, request_context_middleware
from .models.constants import BASE_CURRENCY
from .models.screen import Command, CommandKind
from .routers import health, rates, screen
from .services.rates.base import RateFetcher
from .services.rates.providers import make_rate_fetcher
from .services.screen import ConverterScreen


def create_app(
    settings_override: Settings | None = None,
    fetcher: Optional[RateFetcher] = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., static provider). fetcher: inject a rate
    fetcher directly, bypassing the provider registry. Falls back to cached
    get_settings().
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)
    log = logging.getLogger("currency_converter")

    if settings.base_currency != BASE_CURRENCY:
        log.warning(
            "base currency %s differs from the supported list's base %s",
            settings.base_currency,
            BASE_CURRENCY,
        )
    rate_fetcher = fetcher if fetcher is not None else make_rate_fetcher(
        settings.exchange_rate_provider, settings
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # First screen open: show today's (latest) rates
        app.state.screen.dispatch(Command(kind=CommandKind.START))
        await app.state.screen.settle()
        yield

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.screen = ConverterScreen(
        rate_fetcher, base_currency=settings.base_currency, today=today
    )

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.CommandError, errors.command_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(screen.router)
    app.include_router(rates.router)

    @app.get("/")
    async def root():
        return {"message": "Currency Converter API", "version": settings.version}

    return app


app = create_app()
