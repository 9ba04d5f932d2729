"""FastAPI application factory for the short URL service.

Responsibilities:
    - Wire the ShortURLService, the AppConfig and a shared httpx.AsyncClient into app.state;
    - Install gzip compression (best speed) and access logging;
    - Map DataStoreError to 503 and any unhandled error to 500 (the process keeps serving).

Example:
    >>> from shorturl.dao.redis import ShortURLRedisDAO
    >>> from shorturl.services import ShortURLService
    >>> from shorturl.utils import load_config
    >>> config = load_config(['--domain', 's.example.com'])
    >>> service = ShortURLService(ShortURLRedisDAO(redis_url=config.dsn, prefix=config.prefix), ttl=config.ttl)
    >>> app = create_app(config, service)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

import shorturl
from shorturl.dao.exceptions import DataStoreError
from shorturl.services import ShortURLService
from shorturl.utils.config import AppConfig
from shorturl.web.middleware import AccessLogMiddleware
from shorturl.web.routes import router
from shorturl.web.constants import (
    DATA_STORE_ERROR_MESSAGE,
    DATA_STORE_UNAVAILABLE,
    INTERNAL_SERVER_ERROR_MESSAGE,
    PROXY_TIMEOUT_SECONDS,
    UNKNOWN_INTERNAL_SERVER_ERROR,
)


logger = logging.getLogger(__name__)


def create_app(config: AppConfig, service: ShortURLService, http_client: httpx.AsyncClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config (AppConfig):
            Effective configuration (the domain is used to format short URLs).
        service (ShortURLService):
            Shortening service with its data store already attached.
        http_client (httpx.AsyncClient | None):
            Client used for proxying. When None, one is created on startup and
            closed on shutdown.

    Returns:
        FastAPI: the configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned = app.state.http_client is None
        if owned:
            app.state.http_client = httpx.AsyncClient(timeout=PROXY_TIMEOUT_SECONDS)
        yield
        if owned:
            await app.state.http_client.aclose()
            app.state.http_client = None

    app = FastAPI(
        title='shorturl',
        version=shorturl.__version__,
        description='URL shortener with renew-on-access leases',
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.config = config
    app.state.service = service
    app.state.http_client = http_client

    app.add_middleware(GZipMiddleware, minimum_size=1000, compresslevel=1)
    app.add_middleware(AccessLogMiddleware)

    @app.exception_handler(DataStoreError)
    async def handle_data_store_error(request: Request, exc: DataStoreError) -> PlainTextResponse:
        logger.error(
            'Data store unavailable. Responding with 503.',
            exc_info=exc,
            extra={'path': request.url.path, 'event': DATA_STORE_UNAVAILABLE},
        )
        return PlainTextResponse(DATA_STORE_ERROR_MESSAGE, status_code=503)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> PlainTextResponse:
        logger.error(
            'Unhandled error. Responding with 500.',
            exc_info=exc,
            extra={'path': request.url.path, 'event': UNKNOWN_INTERNAL_SERVER_ERROR},
        )
        return PlainTextResponse(INTERNAL_SERVER_ERROR_MESSAGE, status_code=500)

    app.include_router(router)
    return app
