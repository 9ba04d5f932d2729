"""Entrypoint: python -m shorturl --domain s.example.com [--port 8080] [--ttl 180d] [--dsn redis://...]

Startup order:
    1. initialize JSON logging;
    2. load configuration (exit 1 if the domain is missing or a value is invalid);
    3. connect to Redis and PING it (exit 1 if unreachable);
    4. serve the FastAPI app with uvicorn.
"""

import sys
import logging
from collections.abc import Sequence

import uvicorn

from shorturl.dao.exceptions import DataStoreError
from shorturl.dao.redis import ShortURLRedisDAO
from shorturl.exceptions import ConfigurationError
from shorturl.services import ShortURLService
from shorturl.utils import initialize_logging, load_config
from shorturl.web import create_app


logger = logging.getLogger('shorturl')


def main(argv: Sequence[str] | None = None) -> int:
    initialize_logging()

    try:
        config = load_config(argv)
    except ConfigurationError as e:
        logger.critical(str(e), extra={'errorCode': e.error_code})
        return 1

    logger.info('Starting shorturl.', extra={'config': config.describe()})

    try:
        dao = ShortURLRedisDAO(redis_url=config.dsn, prefix=config.prefix)
    except DataStoreError as e:
        logger.critical(str(e))
        return 1

    service = ShortURLService(dao, ttl=config.ttl)
    app = create_app(config, service)

    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    return 0


if __name__ == '__main__':
    sys.exit(main())
