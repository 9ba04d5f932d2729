from shorturl.dao.base import ShortURLBaseDAO
from shorturl.dao.redis import ShortURLRedisDAO


__all__ = [
    'ShortURLBaseDAO',
    'ShortURLRedisDAO',
]
