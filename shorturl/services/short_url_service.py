"""Short URL lifecycle: shortening, resolution and renew-on-access.

Lifecycle of a mapping:
    - shorten() creates it (or reuses the live one for the same long URL) and
      re-arms both directions to the full TTL, so shortening doubles as a keep-alive;
    - resolve() looks it up and renews it;
    - Redis expires it once it has gone unused long enough. There is no delete path.

Renewal (renew-on-access):
    At most once per renewal period (1 day) per shortcode, guarded by a Redis
    SET NX lock, a resolve pushes the expiry of both directions out by one more
    period, counted from whatever TTL was left (sliding window, not from "now").
    Read-heavy traffic therefore costs at most one extra write per code per day,
    active links never expire and unused links decay on schedule.

Classes:
    ShortURLService:
        Orchestrates shortcode generation, the key encoding and the lease DAO.

Example:
    >>> from shorturl.dao.redis import ShortURLRedisDAO
    >>> service = ShortURLService(ShortURLRedisDAO(redis_url='redis://127.0.0.1:6379/0'), ttl=180 * 86400)
    >>> code = service.shorten('https://example.com/a/b?c=1')
    >>> service.shorten('https://example.com/a/b?c=1') == code
    True
    >>> service.resolve(code)
    'https://example.com/a/b?c=1'
"""

import logging
from collections.abc import Callable

from shorturl.dao.base import ShortURLBaseDAO
from shorturl.dao.exceptions import DataStoreError, ShortURLNotFoundError
from shorturl.utils.shortener import encode_long_url, generate_shortcode
from shorturl.utils.constants import DEFAULT_RENEWAL_SECONDS, DEFAULT_TTL_SECONDS, SHORTCODE_LENGTH


logger = logging.getLogger(__name__)


class ShortURLService:
    """Shorten and resolve URLs on top of a ShortURLBaseDAO.

    Attributes:
        dao (ShortURLBaseDAO):
            Lease store adapter.
        ttl (int):
            Default lifetime of a mapping in seconds.
        renewal (int):
            Renewal lock period and per-renewal extension in seconds.
        code_length (int):
            Length of generated shortcodes.
        code_generator (Callable[[int], str]):
            Shortcode factory, generate_shortcode() unless overridden.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        ttl: int = DEFAULT_TTL_SECONDS,
        renewal: int = DEFAULT_RENEWAL_SECONDS,
        code_length: int = SHORTCODE_LENGTH,
        code_generator: Callable[[int], str] = generate_shortcode,
    ):
        if ttl <= 0:
            raise ValueError(f'TTL must be positive (given value: {ttl}).')
        if renewal <= 0:
            raise ValueError(f'Renewal period must be positive (given value: {renewal}).')

        self.dao = dao
        self.ttl = ttl
        self.renewal = renewal
        self.code_length = code_length
        self.code_generator = code_generator

    def shorten(self, long_url: str, ttl: int | None = None) -> str:
        """Return the shortcode for `long_url`, creating the mapping if needed.

        Repeated calls for the same long URL return the same shortcode while the
        mapping is alive, and every call re-arms both directions to the full TTL.

        Args:
            long_url (str):
                URL to shorten, stored verbatim.
            ttl (int | None):
                Lifetime in seconds. Defaults to the service TTL.

        Returns:
            str: the shortcode.

        Raises:
            ValueError: if long_url is empty.
            DataStoreError: if the data store is unavailable.
        """
        if not long_url:
            raise ValueError('Long URL must be a non-empty string.')
        ttl = self.ttl if ttl is None else ttl

        encoded = encode_long_url(long_url)
        shortcode = self.dao.get_reverse(encoded)

        if shortcode == '':
            logger.warning('Ignoring empty shortcode stored in reverse index.', extra={'longUrl': long_url})

        if shortcode:
            self.dao.arm_expiry(shortcode, encoded, ttl)
            logger.info('Reused existing short URL.', extra={'shortcode': shortcode, 'ttl': ttl})
        else:
            # NOTE: two concurrent shortens of the same new URL may both land here.
            #       The last MSET wins the reverse index; the other code keeps its
            #       forward key and simply expires un-renewed.
            shortcode = self.code_generator(self.code_length)
            self.dao.create_mapping(encoded, shortcode, long_url, ttl=ttl)
            logger.info('Created short URL.', extra={'shortcode': shortcode, 'ttl': ttl})

        return shortcode

    def resolve(self, shortcode: str) -> str:
        """Return the long URL behind `shortcode` and renew its lease.

        Raises:
            ShortURLNotFoundError: if the shortcode is unknown or expired.
            DataStoreError: if the lookup itself fails.
        """
        long_url = self.dao.get_forward(shortcode)
        if not long_url:
            if long_url == '':
                logger.warning('Ignoring empty long URL stored in forward index.', extra={'shortcode': shortcode})
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        # The redirect does not depend on the renewal outcome
        try:
            self.renew(shortcode, long_url)
        except DataStoreError:
            logger.exception('Failed to renew short URL lease.', extra={'shortcode': shortcode})

        return long_url

    def renew(self, shortcode: str, long_url: str) -> bool:
        """Extend both directions by one renewal period, at most once per period.

        Returns:
            bool: True if the TTLs were extended.
        """
        if not self.dao.try_acquire_lock(shortcode, self.renewal):
            logger.debug('Renewal lock held, skipping.', extra={'shortcode': shortcode})
            return False

        remaining = self.dao.remaining_ttl(shortcode)
        if not remaining.expiring:
            # Non-expiring (or vanished) mappings are left alone
            logger.info('Short URL has no TTL to extend.', extra={'shortcode': shortcode, 'ttlState': str(remaining.state)})
            return False

        extended = remaining.seconds + self.renewal
        self.dao.arm_expiry(shortcode, encode_long_url(long_url), extended)
        logger.info('Renewed short URL lease.', extra={'shortcode': shortcode, 'ttl': extended})
        return True
