"""Process configuration for the short URL service.

Every option can be given as a command-line flag or as an environment variable;
flags win over the environment, the environment wins over built-in defaults.

    Flag        Environment         Default
    --port      SHORTURL_PORT       8080
    --host      SHORTURL_HOST       0.0.0.0
    --domain    SHORTURL_DOMAIN     (required)
    --ttl       SHORTURL_TTL        180d
    --dsn       SHORTURL_DSN        redis://127.0.0.1:6379
    --prefix    SHORTURL_PREFIX     shorturl

The domain is only used to format the short URL returned to clients, e.g.
`https://<domain>/<shortcode>`. The service refuses to start without it.

Classes:
    AppConfig:
        Frozen view of the effective configuration.

Functions:
    load_config(argv: Sequence[str] | None = None) -> AppConfig
        Parse flags and environment into an AppConfig, validating every value.

Example:
    >>> os.environ['SHORTURL_DOMAIN'] = 's.example.com'
    >>> config = load_config(['--ttl', '30d'])
    >>> config.ttl
    2592000
    >>> config.domain
    's.example.com'
"""

import os
import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from shorturl.exceptions import BadConfigurationError, MissingConfigurationError
from shorturl.utils.helpers import parse_duration, redact_dsn
from shorturl.utils.constants import (
    DEFAULT_DSN,
    DEFAULT_HOST,
    DEFAULT_KEY_PREFIX,
    DEFAULT_PORT,
    DEFAULT_TTL,
    DEFAULT_TTL_SECONDS,
    DOMAIN_ENV,
    DSN_ENV,
    HOST_ENV,
    PORT_ENV,
    PREFIX_ENV,
    TTL_ENV,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """Effective service configuration.

    Attributes:
        domain (str):
            Public domain used to build returned short URLs.
        port (int):
            TCP port to listen on.
        host (str):
            Interface to bind.
        ttl (int):
            Default short URL lifetime in seconds.
        dsn (str):
            Redis connection string, redis://<user>:<password>@<host>:<port>/<db>.
        prefix (str):
            Redis key namespace.
    """

    domain: str
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    ttl: int = DEFAULT_TTL_SECONDS
    dsn: str = DEFAULT_DSN
    prefix: str = DEFAULT_KEY_PREFIX

    def describe(self) -> dict:
        """Loggable summary with secrets masked."""
        return {
            'domain': self.domain,
            'port': self.port,
            'host': self.host,
            'ttl': self.ttl,
            'dsn': redact_dsn(self.dsn),
            'prefix': self.prefix,
        }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shorturl',
        description='URL shortening and redirection service backed by Redis.',
    )
    parser.add_argument('--port', default=os.getenv(PORT_ENV, str(DEFAULT_PORT)), help=f'Port to listen on (env: {PORT_ENV}).')
    parser.add_argument('--host', default=os.getenv(HOST_ENV, DEFAULT_HOST), help=f'Interface to bind (env: {HOST_ENV}).')
    parser.add_argument(
        '--domain',
        default=os.getenv(DOMAIN_ENV, ''),
        help=f'Public short URL domain, required (env: {DOMAIN_ENV}).',
    )
    parser.add_argument(
        '--ttl',
        default=os.getenv(TTL_ENV, DEFAULT_TTL),
        help=f"Short URL lifetime, e.g. '180d', '12h' or seconds (env: {TTL_ENV}, default: {DEFAULT_TTL}).",
    )
    parser.add_argument(
        '--dsn',
        default=os.getenv(DSN_ENV, DEFAULT_DSN),
        help=f'Redis connection string, redis://<user>:<password>@<host>:<port>/<db_number> (env: {DSN_ENV}).',
    )
    parser.add_argument('--prefix', default=os.getenv(PREFIX_ENV, DEFAULT_KEY_PREFIX), help=f'Redis key namespace (env: {PREFIX_ENV}).')
    return parser


def load_config(argv: Sequence[str] | None = None) -> AppConfig:
    """Parse command-line flags (falling back to environment variables) into an AppConfig

    Args:
        argv (Sequence[str] | None):
            Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        AppConfig: validated configuration.

    Raises:
        MissingConfigurationError:
            If no domain is configured.
        BadConfigurationError:
            If the port, TTL or DSN are invalid.
    """
    args = build_parser().parse_args(argv)

    domain = (args.domain or '').strip()
    if not domain:
        raise MissingConfigurationError(f"Short URL domain is required (use --domain or set '{DOMAIN_ENV}').")

    try:
        port = int(args.port)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f"Invalid port '{args.port}'.") from e
    if not 0 < port < 65536:
        raise BadConfigurationError(f'Port must be within 1-65535 (given value: {port}).')

    try:
        ttl = parse_duration(args.ttl)
    except ValueError as e:
        raise BadConfigurationError(str(e)) from e
    if ttl <= 0:
        raise BadConfigurationError(f'TTL must be a positive duration (given value: {args.ttl}).')

    if not args.dsn.startswith(('redis://', 'rediss://', 'unix://')):
        raise BadConfigurationError(f"Unsupported Redis DSN scheme '{redact_dsn(args.dsn)}'.")

    config = AppConfig(domain=domain, port=port, host=args.host, ttl=ttl, dsn=args.dsn, prefix=args.prefix)
    logger.debug('Loaded configuration.', extra={'config': config.describe()})
    return config
