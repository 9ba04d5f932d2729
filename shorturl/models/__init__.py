from shorturl.models.remaining_ttl import RemainingTTL, TTLState


__all__ = [
    'RemainingTTL',
    'TTLState',
]
