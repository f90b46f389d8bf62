from typing import Any, Dict, Optional


class StoreError(Exception):
    """Base for every failure a cart or wishlist operation reports to its caller.

    ``kind`` is the stable identifier clients can branch on, ``status_code`` the
    HTTP status the API layer answers with, and ``data`` an optional payload
    that is safe to show to the caller.
    """

    kind = "Internal"
    status_code = 500

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data


class InvalidArgument(StoreError):
    kind = "InvalidArgument"
    status_code = 400


class NotFound(StoreError):
    kind = "NotFound"
    status_code = 404


class Unavailable(StoreError):
    """The plant exists but cannot be purchased right now."""

    kind = "Unavailable"
    status_code = 400


class AlreadyExists(StoreError):
    kind = "AlreadyExists"
    status_code = 400


class Transient(StoreError):
    """Store or lock timeout, lost connection, or a concurrent write conflict."""

    kind = "Transient"
    status_code = 503


class Internal(StoreError):
    kind = "Internal"
    status_code = 500
