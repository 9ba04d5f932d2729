"""Remaining time-to-live of a data store key.

Redis reports TTLs with two negative sentinels (-2: key absent, -1: key has no
expiry). RemainingTTL turns those into explicit states so callers never compare
against magic numbers.

Example:
    >>> RemainingTTL.from_redis(3600)
    RemainingTTL(state=<TTLState.EXPIRING: 'expiring'>, seconds=3600)
    >>> RemainingTTL.from_redis(-1).state
    <TTLState.NO_EXPIRY: 'no_expiry'>
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class TTLState(StrEnum):
    EXPIRING = 'expiring'
    NO_EXPIRY = 'no_expiry'
    ABSENT = 'absent'


@dataclass(frozen=True)
class RemainingTTL:
    state: TTLState
    seconds: Optional[int] = None

    @property
    def expiring(self) -> bool:
        return self.state is TTLState.EXPIRING

    @classmethod
    def from_redis(cls, ttl: int) -> 'RemainingTTL':
        """Build from the integer reply of the Redis TTL command."""
        if ttl == -2:
            return cls(TTLState.ABSENT)
        if ttl == -1:
            return cls(TTLState.NO_EXPIRY)
        # TTL reports 0 for a key in its last second; it still exists
        return cls(TTLState.EXPIRING, max(int(ttl), 0))
