# Short URL lease durations (seconds)
ONE_DAY_SECONDS = 86_400  # 60 * 60 * 24
DEFAULT_TTL_SECONDS = 15_552_000  # 180 days
DEFAULT_RENEWAL_SECONDS = ONE_DAY_SECONDS

# Short code shape
SHORTCODE_LENGTH = 6

# Default Redis key namespace
DEFAULT_KEY_PREFIX = 'shorturl'

# Server defaults
DEFAULT_PORT = 8080
DEFAULT_HOST = '0.0.0.0'  # noqa: S104
DEFAULT_DSN = 'redis://127.0.0.1:6379'
DEFAULT_TTL = '180d'

# Environment variable names
PORT_ENV = 'SHORTURL_PORT'
HOST_ENV = 'SHORTURL_HOST'
DOMAIN_ENV = 'SHORTURL_DOMAIN'
TTL_ENV = 'SHORTURL_TTL'
DSN_ENV = 'SHORTURL_DSN'
PREFIX_ENV = 'SHORTURL_PREFIX'
LOG_LEVEL_ENV = 'LOG_LEVEL'
