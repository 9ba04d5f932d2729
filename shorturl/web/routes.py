"""HTTP routes of the short URL service (GET only).

    GET  /                   placeholder text
    GET  /http<rest>         shorten the long URL given as the request target,
                             respond with https://<domain>/<shortcode>
    GET  /<shortcode>        301 redirect to the long URL
    GET  /sub/<shortcode>    proxy to the long URL instead of redirecting
    GET  /proxy/<url>        proxy to <url>, no lookup involved

Unknown or expired shortcodes answer 200 with a plain-text notice (kept for
compatibility with existing clients). DataStoreError is mapped to 503 by the
application's exception handlers, see shorturl.web.app.

Sync handlers run in FastAPI's threadpool since the Redis client is blocking;
the async proxy handlers offload the lookup with run_in_threadpool.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from shorturl.dao.exceptions import ShortURLNotFoundError
from shorturl.services import ShortURLService
from shorturl.utils.config import AppConfig
from shorturl.utils.helpers import get_short_url
from shorturl.web.proxy import original_url, proxy_request
from shorturl.web.constants import (
    DIRECT_PROXY,
    REDIRECT_SUCCESS,
    SERVICE_UNAVAILABLE_MESSAGE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_NOT_FOUND_MESSAGE,
    SHORTEN_SUCCESS,
    SUBSCRIBE_PROXY,
)


__all__ = ['router']

logger = logging.getLogger(__name__)

router = APIRouter()


def get_service(request: Request) -> ShortURLService:
    return request.app.state.service


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def not_found(shortcode: str) -> PlainTextResponse:
    logger.info(
        'Short URL record not found in database.',
        extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
    )
    return PlainTextResponse(SHORT_URL_NOT_FOUND_MESSAGE)


@router.get('/', response_class=PlainTextResponse)
def index() -> str:
    return SERVICE_UNAVAILABLE_MESSAGE


@router.get('/sub/{shortcode}')
async def subscribe(shortcode: str, request: Request, service: ShortURLService = Depends(get_service)) -> Response:
    try:
        long_url = await run_in_threadpool(service.resolve, shortcode)
    except ShortURLNotFoundError:
        return not_found(shortcode)

    logger.info('Proxying short URL to target.', extra={'shortcode': shortcode, 'targetUrl': long_url, 'event': SUBSCRIBE_PROXY})
    return await proxy_request(request, long_url, request.app.state.http_client)


@router.get('/proxy/{target:path}')
async def proxy(target: str, request: Request) -> Response:
    target_url = original_url(request, strip_prefix='/proxy/')
    logger.info('Proxying request to target.', extra={'targetUrl': target_url, 'event': DIRECT_PROXY})
    return await proxy_request(request, target_url, request.app.state.http_client)


@router.get('/http{rest:path}')
def shorten(
    rest: str,
    request: Request,
    service: ShortURLService = Depends(get_service),
    config: AppConfig = Depends(get_config),
) -> Response:
    long_url = original_url(request)

    # A single path segment such as /httpXy is a shortcode, not a long URL
    if '/' not in request.url.path[1:]:
        return redirect(request.url.path[1:], service)

    shortcode = service.shorten(long_url)
    short_url = get_short_url(config.domain, shortcode)
    logger.info('Shortened long URL.', extra={'shortcode': shortcode, 'longUrl': long_url, 'event': SHORTEN_SUCCESS})
    return PlainTextResponse(short_url)


@router.get('/{shortcode}')
def redirect(shortcode: str, service: ShortURLService = Depends(get_service)) -> Response:
    try:
        long_url = service.resolve(shortcode)
    except ShortURLNotFoundError:
        return not_found(shortcode)

    logger.info('Redirecting client to target URL.', extra={'shortcode': shortcode, 'targetUrl': long_url, 'event': REDIRECT_SUCCESS})
    return RedirectResponse(long_url, status_code=301)
