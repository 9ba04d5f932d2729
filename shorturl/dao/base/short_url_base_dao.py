"""Abstract base class for short URL lease data access objects (DAOs).

The short URL service never talks to a data store directly. It relies on this
small contract, which captures the bidirectional mapping, its dual expiry and
the renewal lock. A concrete implementation (ShortURLRedisDAO) maps it onto Redis;
tests substitute in-memory fakes.

Responsibilities:
    - Look up both directions of a mapping.
    - Write both directions of a new mapping atomically.
    - (Re)arm the expiry of both directions together.
    - Hand out a self-expiring renewal lock to exactly one caller.
    - Report the remaining TTL of a mapping.

NOTE:
    - Mappings expire automatically. The DAO does not provide an interface to
      manually delete entries.
    - Every method raises DataStoreError when the data store cannot serve the
      request. A failure is never reported as "absent".
"""

from abc import ABC, abstractmethod

from shorturl.models import RemainingTTL


class ShortURLBaseDAO(ABC):
    """Interface for short URL lease data access objects (DAOs).

    Methods:
        get_forward(shortcode) -> str | None:
            Long URL stored for a shortcode, None if absent.

        get_reverse(encoded_long_url) -> str | None:
            Shortcode stored for an encoded long URL, None if absent.

        create_mapping(encoded_long_url, shortcode, long_url, ttl=None) -> ShortURLBaseDAO:
            Write both directions in one atomic step (optionally with their TTL).

        arm_expiry(shortcode, encoded_long_url, ttl) -> ShortURLBaseDAO:
            Set the TTL of both directions to `ttl` seconds.

        try_acquire_lock(shortcode, duration) -> bool:
            Set-if-absent the renewal lock with a TTL. True only for the winner.

        remaining_ttl(shortcode) -> RemainingTTL:
            Remaining TTL of the forward key.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLRedisDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def get_forward(self, shortcode: str, **kwargs) -> str | None:
        """Retrieve the long URL a shortcode points to.

        Args:
            shortcode (str):
                The public short identifier.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str | None: the long URL, or None when the key is absent (or expired).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_reverse(self, encoded_long_url: str, **kwargs) -> str | None:
        """Retrieve the shortcode currently issued for an encoded long URL.

        Returns:
            str | None: the shortcode, or None when the key is absent (or expired).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def create_mapping(
        self,
        encoded_long_url: str,
        shortcode: str,
        long_url: str,
        ttl: int | None = None,
        **kwargs,
    ) -> 'ShortURLBaseDAO':
        """Store both directions of a mapping atomically.

        A reader must never observe only one direction populated. When `ttl` is
        given, both expirations are armed in the same atomic step.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def arm_expiry(self, shortcode: str, encoded_long_url: str, ttl: int, **kwargs) -> 'ShortURLBaseDAO':
        """Set the TTL (seconds) of both the forward and the reverse key.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def try_acquire_lock(self, shortcode: str, duration: int, **kwargs) -> bool:
        """Atomically create the renewal lock for a shortcode if it doesn't exist.

        Returns:
            bool: True for the single caller that created the lock, False while it is held.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def remaining_ttl(self, shortcode: str, **kwargs) -> RemainingTTL:
        """Remaining TTL of the forward (shortcode -> long URL) key.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
