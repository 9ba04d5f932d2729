# Plain-text response bodies
SERVICE_UNAVAILABLE_MESSAGE = 'Service temporarily unavailable!'
SHORT_URL_NOT_FOUND_MESSAGE = 'Short URL does not exist or has expired!'
DATA_STORE_ERROR_MESSAGE = 'Service Unavailable (data store error)'
INTERNAL_SERVER_ERROR_MESSAGE = 'Internal Server Error'
BAD_GATEWAY_MESSAGE = 'Bad Gateway'

# Log event names
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
SUBSCRIBE_PROXY = 'SUBSCRIBE_PROXY'
DIRECT_PROXY = 'DIRECT_PROXY'
UPSTREAM_ERROR = 'UPSTREAM_ERROR'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'

# Upstream proxy timeout (seconds)
PROXY_TIMEOUT_SECONDS = 30.0

# Headers that describe a single connection and must not be forwarded
HOP_BY_HOP_HEADERS = frozenset(
    {
        'connection',
        'keep-alive',
        'proxy-authenticate',
        'proxy-authorization',
        'proxy-connection',
        'te',
        'trailer',
        'trailers',
        'transfer-encoding',
        'upgrade',
    }
)
