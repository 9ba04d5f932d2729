from shorturl.services.short_url_service import ShortURLService


__all__ = [
    'ShortURLService',
]
