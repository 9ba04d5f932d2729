import functools
import redis
from typing import Any

from shorturl.dao.exceptions import DataStoreError


__all__ = []


def _describe_connection(client: Any) -> str:
    info = client.connection_pool.connection_kwargs
    redis_db = info.get('db')
    socket_path = info.get('path')
    if socket_path:
        return f'{socket_path}/{redis_db}'
    return f'{info.get("host")}:{info.get("port")}/{redis_db}'


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis failures

    Connectivity problems (refused connections, timeouts, failed authentication)
    and any other Redis error are re-raised as DataStoreError, so callers can tell
    an unavailable store apart from a missing key.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on Redis failures.

    Example:
        >>> @handle_redis_connection_error
        ... def get_forward(self, shortcode):
        ...     return self.redis.get(self.keys.short_url_key(shortcode))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {_describe_connection(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis command failed at {_describe_connection(self.redis)}: {e}') from e

    return wrapper
