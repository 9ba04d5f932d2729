import functools
from collections.abc import Callable

from shorturl.utils.constants import DEFAULT_KEY_PREFIX


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for the three short URL namespaces.

    - long:  reverse index, Base58-encoded long URL -> shortcode
    - short: forward index, shortcode -> long URL
    - lock:  renewal lock per shortcode

    All keys are namespaced with `prefix` ('shorturl' by default, which keeps the
    layout shared with existing deployments). Pass prefix=None for bare keys.
    """

    def __init__(self, prefix: str | None = DEFAULT_KEY_PREFIX):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def long_url_key(self, encoded_long_url: str) -> str:
        return f'long:{encoded_long_url}'

    @prefix_key
    def short_url_key(self, shortcode: str) -> str:
        return f'short:{shortcode}'

    @prefix_key
    def lock_key(self, shortcode: str) -> str:
        return f'lock:{shortcode}'
