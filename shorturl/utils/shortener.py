"""Shortcode generation and long URL key encoding

This module provides the two value transformations the short URL service needs
before touching the data store:

Functions:
    generate_shortcode(length=6):
        Generate a random Base62 shortcode.
    encode_long_url(long_url):
        Encode an arbitrary long URL into a key-safe Base58 string.
    decode_long_url(encoded):
        Inverse of encode_long_url().

Example:
    >>> from shorturl.utils import generate_shortcode, encode_long_url, decode_long_url
    >>> generate_shortcode()
    'K9xT2q'
    >>> decode_long_url(encode_long_url('https://example.com/a b'))
    'https://example.com/a b'
"""

import time
import random
import string

import base58


ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
BASE = len(ALPHABET)  # 10 digits + 26 lowercase + 26 uppercase

# Seeded once per process from the wall clock. Shortcodes are identifiers,
# not secrets, so a non-cryptographic source is enough.
_random = random.Random(time.time_ns())


def generate_shortcode(length: int = 6) -> str:
    """Generate a random shortcode of `length` Base62 characters.

    Each character is drawn uniformly and independently from ALPHABET. The
    generator does not check for collisions with existing codes: with the
    default length the code space is 62^6 (about 5.6e10) and mappings expire.

    Args:
        length (int, optional):
            Number of characters. Defaults to 6.

    Returns:
        str: the shortcode.

    Raises:
        TypeError: if length is not an integer.
        ValueError: if length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(_random.choices(ALPHABET, k=length))


def encode_long_url(long_url: str) -> str:
    """Encode a long URL into a reversible, key-safe string.

    Raw URLs may contain characters (spaces, newlines, unicode, ...) that make
    awkward Redis keys. The UTF-8 bytes are Base58 encoded (Bitcoin alphabet),
    which is injective, so two distinct URLs never share a reverse key.

    Args:
        long_url (str): the URL exactly as received.

    Returns:
        str: Base58 text (empty string for an empty URL).
    """
    if not isinstance(long_url, str):
        raise TypeError(f'Long URL must be of type string (given type: {type(long_url)}).')

    # surrogatepass keeps lone surrogates (from percent-decoded garbage) encodable
    return base58.b58encode(long_url.encode('utf-8', 'surrogatepass')).decode('ascii')


def decode_long_url(encoded: str) -> str:
    return base58.b58decode(encoded).decode('utf-8', 'surrogatepass')
