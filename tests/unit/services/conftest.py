import threading
from collections import Counter

import pytest

from shorturl.dao.base import ShortURLBaseDAO
from shorturl.models import RemainingTTL, TTLState


class FakeClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, now: int = 0):
        self.now = now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class InMemoryShortURLDAO(ShortURLBaseDAO):
    """Dict-backed DAO with Redis-like key expiry driven by a FakeClock."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.forward = {}
        self.reverse = {}
        self.locks = {}
        self.expires_at = {}
        self.calls = Counter()
        self._mutex = threading.Lock()

    def _alive(self, key) -> bool:
        deadline = self.expires_at.get(key)
        return deadline is None or deadline > self.clock.now

    def _lookup(self, store: dict, key: str, expiry_key) -> str | None:
        if key in store and not self._alive(expiry_key):
            del store[key]
            self.expires_at.pop(expiry_key, None)
        return store.get(key)

    def get_forward(self, shortcode, **kwargs):
        with self._mutex:
            self.calls['get_forward'] += 1
            return self._lookup(self.forward, shortcode, ('short', shortcode))

    def get_reverse(self, encoded_long_url, **kwargs):
        with self._mutex:
            self.calls['get_reverse'] += 1
            return self._lookup(self.reverse, encoded_long_url, ('long', encoded_long_url))

    def create_mapping(self, encoded_long_url, shortcode, long_url, ttl=None, **kwargs):
        with self._mutex:
            self.calls['create_mapping'] += 1
            self.reverse[encoded_long_url] = shortcode
            self.forward[shortcode] = long_url
            # SET clears any previous TTL
            self.expires_at.pop(('long', encoded_long_url), None)
            self.expires_at.pop(('short', shortcode), None)
            if ttl is not None:
                self.expires_at[('long', encoded_long_url)] = self.clock.now + ttl
                self.expires_at[('short', shortcode)] = self.clock.now + ttl
        return self

    def arm_expiry(self, shortcode, encoded_long_url, ttl, **kwargs):
        with self._mutex:
            self.calls['arm_expiry'] += 1
            if shortcode in self.forward:
                self.expires_at[('short', shortcode)] = self.clock.now + ttl
            if encoded_long_url in self.reverse:
                self.expires_at[('long', encoded_long_url)] = self.clock.now + ttl
        return self

    def try_acquire_lock(self, shortcode, duration, **kwargs):
        with self._mutex:
            self.calls['try_acquire_lock'] += 1
            held_until = self.locks.get(shortcode)
            if held_until is not None and held_until > self.clock.now:
                return False
            self.locks[shortcode] = self.clock.now + duration
            return True

    def remaining_ttl(self, shortcode, **kwargs):
        with self._mutex:
            self.calls['remaining_ttl'] += 1
            if shortcode not in self.forward or not self._alive(('short', shortcode)):
                return RemainingTTL(TTLState.ABSENT)
            deadline = self.expires_at.get(('short', shortcode))
            if deadline is None:
                return RemainingTTL(TTLState.NO_EXPIRY)
            return RemainingTTL(TTLState.EXPIRING, deadline - self.clock.now)

    def ttl_of(self, kind: str, key: str) -> int | None:
        deadline = self.expires_at.get((kind, key))
        return None if deadline is None else deadline - self.clock.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(now=1_000_000)


@pytest.fixture
def dao(clock) -> InMemoryShortURLDAO:
    return InMemoryShortURLDAO(clock)


@pytest.fixture
def codes():
    """Deterministic shortcode generator yielding the given codes in order."""

    def factory(*values):
        pending = iter(values)
        return lambda length: next(pending)

    return factory
