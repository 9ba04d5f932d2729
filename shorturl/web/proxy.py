"""Streaming reverse proxy used by /sub/<shortcode> and /proxy/<url>.

The incoming request is replayed against the target URL with a shared
httpx.AsyncClient. The client's Accept-Encoding is passed through (identity
when absent), and the upstream status, headers and body are streamed back
unmodified, except for hop-by-hop headers which only make sense per connection.

Redirects are not followed: a 3xx from upstream is passed to the client as is.

Functions:
    original_url(request, strip_prefix) -> str
        Rebuild the raw request target (path + query) minus a route prefix.
    proxy_request(request, target_url, client) -> Response
        Forward the request and stream back the upstream response.
"""

import logging

import httpx
from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response, StreamingResponse

from shorturl.web.constants import BAD_GATEWAY_MESSAGE, HOP_BY_HOP_HEADERS, UPSTREAM_ERROR


logger = logging.getLogger(__name__)

# Not forwarded upstream: host belongs to the target
_SKIP_REQUEST_HEADERS = HOP_BY_HOP_HEADERS | {'host', 'content-length'}


def original_url(request: Request, strip_prefix: str = '/') -> str:
    """Return the request target exactly as sent (percent-encoding preserved) minus `strip_prefix`.

    Example:
        GET /proxy/https://example.com/feed?token=1
        >>> original_url(request, '/proxy/')
        'https://example.com/feed?token=1'
    """
    raw_path = request.scope.get('raw_path')
    path = raw_path.decode('utf-8', 'replace') if raw_path else request.url.path
    if path.startswith(strip_prefix):
        path = path[len(strip_prefix) :]

    query = request.scope.get('query_string', b'').decode('utf-8', 'replace')
    return f'{path}?{query}' if query else path


async def proxy_request(request: Request, target_url: str, client: httpx.AsyncClient) -> Response:
    """Forward `request` to `target_url` and stream the upstream response back

    Args:
        request (Request):
            The incoming request; its method and end-to-end headers are forwarded.
        target_url (str):
            Absolute URL to forward to.
        client (httpx.AsyncClient):
            Shared client owning the upstream connection pool.

    Returns:
        Response:
            StreamingResponse mirroring upstream, or 502 when upstream can't be reached.
    """
    headers = [(key, value) for key, value in request.headers.raw if key.decode('latin-1').lower() not in _SKIP_REQUEST_HEADERS]
    if 'accept-encoding' not in request.headers:
        # Otherwise httpx asks for gzip on the client's behalf
        headers.append((b'accept-encoding', b'identity'))

    try:
        upstream_request = client.build_request(request.method, target_url, headers=headers)
        upstream = await client.send(upstream_request, stream=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(
            'Upstream request failed. Responding with 502.',
            extra={'targetUrl': target_url, 'error': repr(e), 'event': UPSTREAM_ERROR},
        )
        return PlainTextResponse(BAD_GATEWAY_MESSAGE, status_code=502)

    response = StreamingResponse(
        upstream.aiter_raw(),
        status_code=upstream.status_code,
        background=BackgroundTask(upstream.aclose),
    )
    response.raw_headers = [
        (key.lower(), value) for key, value in upstream.headers.raw if key.decode('latin-1').lower() not in HOP_BY_HOP_HEADERS
    ]
    return response
