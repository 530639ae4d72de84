"""Typed failures raised by the user store.

Callers discriminate on the exception class (or its ``kind``) rather than on
message text. Driver exceptions are always chained as ``__cause__``.
"""


class StoreError(Exception):
    kind = "store_error"


class ConstraintViolation(StoreError):
    """A write was rejected by a store-enforced rule, e.g. a duplicate email."""

    kind = "constraint_violation"


class NotFound(StoreError):
    """A row that must exist could not be fetched."""

    kind = "not_found"


class StoreConnectionError(StoreError):
    """Driver or I/O level failure talking to the store."""

    kind = "connection_error"


class ParseError(ValueError):
    """Configuration could not be parsed."""

    kind = "parse_error"
