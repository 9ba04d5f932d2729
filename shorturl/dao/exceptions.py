"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a short code is absent (or already expired) in the data store.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, auth, OOM, etc.).

Example:
    >>> from shorturl.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    shorturl.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a short URL is not found in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, failed authentication, OOM, etc.
    """

    pass
