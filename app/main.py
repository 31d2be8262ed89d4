from __future__ import annotations

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, get_settings
from app.core.logging import configure_logging, get_logger
from app.routers import conversion
from app.services.providers.quote_api import AwesomeApiQuoteProvider
from app.services.rate_cache import DirectRateSource, QuoteProvider, RateCache, RateSource

logger = get_logger()


def build_rate_source(
    settings: Settings,
    provider: QuoteProvider | None = None,
    clock: Callable[[], float] | None = None,
) -> RateSource:
    if provider is None:
        provider = AwesomeApiQuoteProvider(settings.quote_api_url, settings.upstream_timeout_seconds)
    if not settings.enable_cache:
        return DirectRateSource(provider)
    return RateCache(provider, ttl_seconds=settings.cache_ttl_seconds, clock=clock or time.monotonic)


def create_app(
    settings: Settings | None = None,
    provider: QuoteProvider | None = None,
    clock: Callable[[], float] | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    # One rate source per app; routes receive it through get_rate_source.
    app.state.settings = settings
    app.state.rate_source = build_rate_source(settings, provider, clock)

    app.include_router(conversion.router)

    @app.get("/")
    async def root():
        return {"service": settings.app_name}

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        logger.info(
            "request",
            path=str(request.url.path),
            method=request.method,
            status_code=response.status_code,
            request_id=request_id,
        )
        response.headers["X-Request-ID"] = request_id
        return response

    logger.info("app_created", enable_cache=settings.enable_cache, cache_ttl_seconds=settings.cache_ttl_seconds)
    return app


app = create_app()
