"""Data Access Object (DAO) implementation for short URL leases in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO.

Responsibilities:
    - Read the forward (shortcode -> long URL) and reverse (long URL -> shortcode) indexes;
    - Write both indexes of a new mapping in a single MSET inside a transaction;
    - Keep the TTLs of both indexes in lockstep;
    - Hand out the per-shortcode renewal lock (SET NX EX);
    - Translate Redis failures into DataStoreError.

Key layout (see RedisKeySchema):
    shorturl:long:<base58 long url>   -> <shortcode>      EX <ttl>
    shorturl:short:<shortcode>        -> <long url>       EX <ttl>
    shorturl:lock:<shortcode>         -> 1                EX <renewal period>

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving short URL leases in a Redis datastore.

Example:
    >>> from shorturl.dao.redis import ShortURLRedisDAO
    >>> from shorturl.utils import encode_long_url

    >>> dao = ShortURLRedisDAO(redis_url='redis://127.0.0.1:6379/0')
    >>> encoded = encode_long_url('https://example.com/a/b?c=1')
    >>> dao.create_mapping(encoded, 'K9xT2q', 'https://example.com/a/b?c=1', ttl=86400)
    <ShortURLRedisDAO>
    >>> dao.get_forward('K9xT2q')
    'https://example.com/a/b?c=1'
    >>> dao.remaining_ttl('K9xT2q')
    RemainingTTL(state=<TTLState.EXPIRING: 'expiring'>, seconds=86400)
"""

from beartype import beartype

from shorturl.dao.base import ShortURLBaseDAO
from shorturl.dao.redis.mixins import RedisClientMixin
from shorturl.dao.redis.helpers import handle_redis_connection_error
from shorturl.models import RemainingTTL


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL leases

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Every public method raises DataStoreError on connectivity (or any other)
    issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def get_forward(self, shortcode: str, **kwargs) -> str | None:
        return self.redis.get(self.keys.short_url_key(shortcode))

    @handle_redis_connection_error
    @beartype
    def get_reverse(self, encoded_long_url: str, **kwargs) -> str | None:
        return self.redis.get(self.keys.long_url_key(encoded_long_url))

    @handle_redis_connection_error
    @beartype
    def create_mapping(
        self,
        encoded_long_url: str,
        shortcode: str,
        long_url: str,
        ttl: int | None = None,
        **kwargs,
    ) -> 'ShortURLRedisDAO':
        """Insert both directions of a short URL mapping into Redis

        The insertion is performed via a Redis transaction with a single MSET.
        When `ttl` is given, both EXPIREs are queued in the same transaction.

        Args:
            encoded_long_url (str):
                Base58 form of the long URL (reverse index key suffix).
            shortcode (str):
                Newly generated shortcode.
            long_url (str):
                The long URL exactly as received.
            ttl (int | None):
                Lifetime in seconds for both keys. None leaves them without expiry.

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        long_url_key = self.keys.long_url_key(encoded_long_url)
        short_url_key = self.keys.short_url_key(shortcode)

        # NOTE: Everything runs inside MULTI/EXEC. Otherwise a crash between the
        #       write and the EXPIREs would leave a mapping that never expires:
        #
        #       (request 1): ShortURLRedisDAO.create_mapping():
        #                    -> MSET shorturl:long:<b58> <shortcode> shorturl:short:<shortcode> <long url>
        #                    ... process dies
        #       (nobody):    -> EXPIRE shorturl:long:<b58> <ttl>
        #                    -> EXPIRE shorturl:short:<shortcode> <ttl>
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.mset({long_url_key: shortcode, short_url_key: long_url})
            if ttl is not None:
                pipe.expire(long_url_key, ttl)
                pipe.expire(short_url_key, ttl)
            pipe.execute()
        return self

    @handle_redis_connection_error
    @beartype
    def arm_expiry(self, shortcode: str, encoded_long_url: str, ttl: int, **kwargs) -> 'ShortURLRedisDAO':
        """Set both the forward and reverse key to expire in `ttl` seconds.

        NOTE: EXPIRE on a missing key is a no-op, so re-arming a mapping that
              expired in the meantime does not resurrect it.
        """
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.expire(self.keys.long_url_key(encoded_long_url), ttl)
            pipe.expire(self.keys.short_url_key(shortcode), ttl)
            pipe.execute()
        return self

    @handle_redis_connection_error
    @beartype
    def try_acquire_lock(self, shortcode: str, duration: int, **kwargs) -> bool:
        """SET shorturl:lock:<shortcode> 1 NX EX <duration>

        Returns:
            bool: True if this call created the lock, False if it was already held.
        """
        return bool(self.redis.set(self.keys.lock_key(shortcode), 1, nx=True, ex=duration))

    @handle_redis_connection_error
    @beartype
    def remaining_ttl(self, shortcode: str, **kwargs) -> RemainingTTL:
        return RemainingTTL.from_redis(self.redis.ttl(self.keys.short_url_key(shortcode)))
