from shorturl.utils.config import AppConfig, load_config
from shorturl.utils.helpers import get_short_url, parse_duration, redact_dsn
from shorturl.utils.shortener import generate_shortcode, encode_long_url, decode_long_url
from shorturl.utils.logging import initialize_logging


__all__ = [
    'AppConfig',
    'load_config',
    'get_short_url',
    'parse_duration',
    'redact_dsn',
    'generate_shortcode',
    'encode_long_url',
    'decode_long_url',
    'initialize_logging',
]
