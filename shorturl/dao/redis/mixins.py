"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize Redis client from a connection string (DSN)
    - Healthcheck Redis client

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
        ...     pass
        ...
        >>> dao = ShortURLRedisDAO(redis_url='redis://127.0.0.1:6379/0')
        >>> dao._healthcheck()
        True
"""

from typing import Optional

import redis

from shorturl.dao.redis.redis_key_schema import RedisKeySchema
from shorturl.dao.exceptions import DataStoreError
from shorturl.dao.redis.helpers import _describe_connection
from shorturl.utils.constants import DEFAULT_DSN, DEFAULT_KEY_PREFIX
from shorturl.utils.helpers import redact_dsn


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a DataStoreError if unreachable.
    """

    def __init__(
        self,
        redis_url: Optional[str] = DEFAULT_DSN,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = DEFAULT_KEY_PREFIX,
        healthcheck: bool = True,
    ):
        """Initialize a Redis-based DAO

        The option is given to either use an existing Redis client instance or
        create one from a connection string.

        Args:
            redis_url (Optional[str]):
                redis://<user>:<password>@<host>:<port>/<db_number>. Defaults to redis://127.0.0.1:6379.

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created from redis_url.

            prefix (Optional[str]):
                Namespace prefix for all Redis keys. Defaults to 'shorturl'.

            healthcheck (bool):
                PING Redis right away. Defaults to True.

        Raises:
            DataStoreError:
                If the DSN is malformed or the Redis healthcheck fails.
        """
        if redis_client is None:
            try:
                redis_client = redis.Redis.from_url(redis_url, decode_responses=True)
            except ValueError as e:
                raise DataStoreError(f"Invalid Redis connection string '{redact_dsn(redis_url)}'.") from e

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        if healthcheck:
            self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis connection cannot be established and raise_error=True.
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to Redis at {_describe_connection(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True
